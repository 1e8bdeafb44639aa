"""Field reduction applied to catalog data before it is sent to the model."""

from typing import Any

from schemas.parfum import CatalogDocument, Parfum

RECOMMENDATION_FIELDS = (
    "name",
    "brand",
    "category",
    "gender",
    "notes",
    "description",
    "price_range",
    "longevity",
    "sillage",
    "season",
    "occasion",
)

COMPARISON_FIELDS = (
    "name",
    "brand",
    "category",
    "gender",
    "notes",
    "longevity",
    "sillage",
    "season",
    "occasion",
)


def curate(parfum: Parfum, fields: tuple[str, ...]) -> dict[str, Any]:
    """Reduce a record to `fields`, in that order."""
    data = parfum.model_dump(mode="json")
    return {field: data[field] for field in fields}


def curate_for_recommendation(catalog: CatalogDocument) -> dict[str, Any]:
    """Every record, reduced to what matters for matching preferences."""
    return {"parfums": [curate(p, RECOMMENDATION_FIELDS) for p in catalog.parfums]}


def summarize_for_question(catalog: CatalogDocument) -> str:
    """One line per record: name, brand, category and gender."""
    return "\n".join(
        f"{p.name} ({p.brand}) - {p.category}, {p.gender.value}"
        for p in catalog.parfums
    )


def curate_for_comparison(first: Parfum, second: Parfum) -> dict[str, Any]:
    """The two records being compared, reduced to their comparable traits."""
    return {
        "parfum1": curate(first, COMPARISON_FIELDS),
        "parfum2": curate(second, COMPARISON_FIELDS),
    }
