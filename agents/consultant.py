"""AI parfum consultant: curated catalog context in, model advice out."""

import logging
from typing import Union

from errors import NotFoundError
from llm.base_client import BaseLLMClient, Message
from retrieval.catalog_store import find_by_name
from schemas.parfum import CatalogDocument, RecommendationRequest

from . import prompts
from .curation import curate_for_comparison, curate_for_recommendation, summarize_for_question

logger = logging.getLogger(__name__)


class ParfumConsultant:
    """
    Builds task-specific prompts from a catalog snapshot and asks the model.

    The snapshot is passed in by the caller on every call; the consultant
    never reads the catalog file itself. Each call makes exactly one request
    and either returns the full completion text or raises the classified
    error from the client.
    """

    DEFAULT_TEMPERATURE = 0.7
    COMPARISON_TEMPERATURE = 0.7

    RECOMMENDATION_MAX_TOKENS = 1500
    QUESTION_MAX_TOKENS = 1200
    COMPARISON_MAX_TOKENS = 1500

    def __init__(self, llm_client: BaseLLMClient, response_language: str = "Indonesian"):
        """
        Initialize consultant.

        Args:
            llm_client: Completion client used for every request
            response_language: Language the model is asked to answer in
        """
        self.llm_client = llm_client
        self.response_language = response_language

    def recommend(
        self,
        preferences: Union[str, RecommendationRequest],
        catalog: CatalogDocument
    ) -> str:
        """
        Recommend 2-3 catalog parfums that fit the user's preferences.

        Args:
            preferences: Free-text preferences or structured wizard answers
            catalog: Catalog snapshot to recommend from

        Returns:
            Recommendation text from the model
        """
        if isinstance(preferences, RecommendationRequest):
            preferences = preferences.to_prompt_text()

        curated = curate_for_recommendation(catalog)
        messages = [
            Message(
                role="system",
                content=prompts.recommendation_system_prompt(curated, self.response_language)
            ),
            Message(role="user", content=prompts.recommendation_user_prompt(preferences)),
        ]

        logger.info(f"Requesting recommendation over {len(curated['parfums'])} parfums")
        return self._complete(messages, max_tokens=self.RECOMMENDATION_MAX_TOKENS)

    def answer_question(self, question: str, catalog: CatalogDocument) -> str:
        """
        Answer a general fragrance question with the catalog as light context.

        Args:
            question: The user's question
            catalog: Catalog snapshot summarized into the prompt

        Returns:
            Answer text from the model
        """
        messages = [
            Message(
                role="system",
                content=prompts.question_system_prompt(
                    summarize_for_question(catalog), self.response_language
                )
            ),
            Message(role="user", content=question),
        ]

        logger.info("Requesting answer to parfum question")
        return self._complete(messages, max_tokens=self.QUESTION_MAX_TOKENS)

    def compare(self, first_name: str, second_name: str, catalog: CatalogDocument) -> str:
        """
        Compare two catalog parfums by name.

        Both names are resolved before any request is made.

        Args:
            first_name: Exact name of the first parfum
            second_name: Exact name of the second parfum
            catalog: Catalog snapshot holding both parfums

        Returns:
            Comparison text from the model

        Raises:
            NotFoundError: If either name is not in the catalog
        """
        first = find_by_name(catalog, first_name)
        second = find_by_name(catalog, second_name)

        missing = [name for name, found in ((first_name, first), (second_name, second)) if found is None]
        if missing:
            raise NotFoundError(
                f"Parfum not found in catalog: {', '.join(missing)}",
                identifier=", ".join(missing)
            )

        curated = curate_for_comparison(first, second)
        messages = [
            Message(
                role="system",
                content=prompts.comparison_system_prompt(curated, self.response_language)
            ),
            Message(role="user", content=prompts.comparison_user_prompt(first_name, second_name)),
        ]

        logger.info(f"Requesting comparison: {first_name} vs {second_name}")
        return self._complete(
            messages,
            max_tokens=self.COMPARISON_MAX_TOKENS,
            temperature=self.COMPARISON_TEMPERATURE
        )

    def _complete(
        self,
        messages: list[Message],
        max_tokens: int,
        temperature: float = DEFAULT_TEMPERATURE
    ) -> str:
        response = self.llm_client.chat(
            messages,
            temperature=temperature,
            max_tokens=max_tokens
        )
        if response.usage:
            logger.debug(f"Token usage: {response.usage}")
        return response.content
