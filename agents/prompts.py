"""Prompt templates for the parfum consultant."""

import json
from typing import Any

RECOMMENDATION_SYSTEM_PROMPT = """You are an AI Parfum Consultant who specializes in fragrance recommendations.
You have deep knowledge of perfumery and fragrance notes, and you give personal, well-reasoned advice.

Available parfums:
{catalog_json}

Recommend the 2-3 parfums from this list that best match the user's preferences.
Format each recommendation as:
1. Parfum name and brand
2. Why it suits the user
3. A short description of its character

Answer in natural, not overly formal {language}."""

RECOMMENDATION_USER_PROMPT = """My preferences:
{preferences}

Please recommend parfums that suit me and explain why."""

QUESTION_SYSTEM_PROMPT = """You are an AI Parfum Consultant and an expert in the world of fragrance.
You answer questions about parfums, fragrance notes, brands, how to wear fragrance, and related tips.

Parfums available in the catalog:
{catalog_summary}

For questions about a specific parfum, draw on general knowledge of that parfum and its brand.
Answer informatively and helpfully, in natural {language}.

If the user asks about a parfum that is not in the catalog, give general advice or suggest alternatives from the available parfums."""

COMPARISON_SYSTEM_PROMPT = """You are an AI Parfum Consultant who specializes in comparing fragrances.
Compare the following two parfums objectively:

{first}

{second}

Present the comparison in a clear, easy-to-follow format. Answer in {language}."""

COMPARISON_USER_PROMPT = """Compare {first_name} vs {second_name}. Explain the main differences and who each one suits best."""

PARFUM_PROFILE = """{name} ({brand}):
- Category: {category}
- Gender: {gender}
- Top Notes: {top}
- Middle Notes: {middle}
- Base Notes: {base}
- Longevity: {longevity}
- Sillage: {sillage}
- Season: {season}
- Occasion: {occasion}"""


def recommendation_system_prompt(curated: dict[str, Any], language: str) -> str:
    """System prompt embedding the curated catalog as JSON."""
    return RECOMMENDATION_SYSTEM_PROMPT.format(
        catalog_json=json.dumps(curated, indent=2, ensure_ascii=False),
        language=language,
    )


def recommendation_user_prompt(preferences: str) -> str:
    """User prompt carrying the preference text."""
    return RECOMMENDATION_USER_PROMPT.format(preferences=preferences.strip())


def question_system_prompt(summary: str, language: str) -> str:
    """System prompt with the one-line catalog summary."""
    return QUESTION_SYSTEM_PROMPT.format(catalog_summary=summary, language=language)


def parfum_profile(curated: dict[str, Any]) -> str:
    """Render one curated record as a readable profile block."""
    notes = curated["notes"]
    return PARFUM_PROFILE.format(
        name=curated["name"],
        brand=curated["brand"],
        category=curated["category"],
        gender=curated["gender"],
        top=", ".join(notes["top"]),
        middle=", ".join(notes["middle"]),
        base=", ".join(notes["base"]),
        longevity=curated["longevity"],
        sillage=curated["sillage"],
        season=curated["season"],
        occasion=curated["occasion"],
    )


def comparison_system_prompt(curated: dict[str, Any], language: str) -> str:
    """System prompt with both records written out in full."""
    return COMPARISON_SYSTEM_PROMPT.format(
        first=parfum_profile(curated["parfum1"]),
        second=parfum_profile(curated["parfum2"]),
        language=language,
    )


def comparison_user_prompt(first_name: str, second_name: str) -> str:
    """User prompt naming the two parfums to compare."""
    return COMPARISON_USER_PROMPT.format(first_name=first_name, second_name=second_name)
