"""Tests for curation, prompt rendering and the ParfumConsultant."""

import json
import pytest
from unittest.mock import Mock
from agents.consultant import ParfumConsultant
from agents.curation import (
    COMPARISON_FIELDS,
    RECOMMENDATION_FIELDS,
    curate_for_comparison,
    curate_for_recommendation,
    summarize_for_question,
)
from agents import prompts
from errors import NotFoundError, ServiceError
from llm.base_client import LLMResponse
from schemas.parfum import CatalogDocument, Gender, RecommendationRequest


def build_catalog():
    return CatalogDocument.model_validate({
        "parfums": [
            {
                "id": "1",
                "name": "Bleu de Chanel",
                "brand": "Chanel",
                "category": "Woody Aromatic",
                "gender": "Men",
                "notes": {
                    "top": ["Grapefruit", "Lemon"],
                    "middle": ["Ginger", "Nutmeg"],
                    "base": ["Incense", "Vetiver"],
                },
                "description": "Fresh and woody.",
                "price_range": "high",
                "longevity": "7-9 hours",
                "season": "All Season",
                "occasion": "Office, Casual",
                "sillage": "moderate",
                "year_released": 2010,
            },
            {
                "id": "2",
                "name": "Coco Mademoiselle",
                "brand": "Chanel",
                "category": "Oriental Floral",
                "gender": "Women",
                "notes": {
                    "top": ["Orange", "Bergamot"],
                    "middle": ["Rose", "Jasmine"],
                    "base": ["Patchouli", "Vanilla"],
                },
                "description": "Sparkling and sensual.",
                "price_range": "high",
                "longevity": "8-10 hours",
                "season": "Spring, Fall",
                "occasion": "Romantic",
                "sillage": "moderate-heavy",
                "year_released": 2001,
            },
        ],
        "brands": ["Chanel"],
        "categories": ["Woody Aromatic", "Oriental Floral"],
    })


class TestCuration:
    """Test field reduction before prompting."""

    def setup_method(self):
        """Set up test fixtures."""
        self.catalog = build_catalog()

    def test_recommendation_fields(self):
        """Test recommendation context drops id and year."""
        curated = curate_for_recommendation(self.catalog)

        assert len(curated["parfums"]) == 2
        first = curated["parfums"][0]
        assert tuple(first) == RECOMMENDATION_FIELDS
        assert "id" not in first
        assert "year_released" not in first
        assert first["gender"] == "Men"
        assert first["notes"]["top"] == ["Grapefruit", "Lemon"]

    def test_question_summary(self):
        """Test question context is one line per parfum."""
        summary = summarize_for_question(self.catalog)

        assert summary.splitlines() == [
            "Bleu de Chanel (Chanel) - Woody Aromatic, Men",
            "Coco Mademoiselle (Chanel) - Oriental Floral, Women",
        ]

    def test_comparison_fields(self):
        """Test comparison context holds only the two records' traits."""
        first, second = self.catalog.parfums
        curated = curate_for_comparison(first, second)

        assert set(curated) == {"parfum1", "parfum2"}
        assert tuple(curated["parfum1"]) == COMPARISON_FIELDS
        assert "description" not in curated["parfum2"]
        assert "price_range" not in curated["parfum2"]


class TestPrompts:
    """Test deterministic prompt rendering."""

    def test_recommendation_prompt_embeds_json(self):
        """Test the curated catalog is embedded as JSON."""
        curated = curate_for_recommendation(build_catalog())

        prompt = prompts.recommendation_system_prompt(curated, "Indonesian")

        assert json.dumps(curated, indent=2) in prompt
        assert "2-3" in prompt
        assert "Indonesian" in prompt
        assert prompt == prompts.recommendation_system_prompt(curated, "Indonesian")

    def test_comparison_prompt_lists_notes(self):
        """Test notes are joined into readable lists."""
        first, second = build_catalog().parfums

        prompt = prompts.comparison_system_prompt(curate_for_comparison(first, second), "English")

        assert "Bleu de Chanel (Chanel):" in prompt
        assert "- Top Notes: Grapefruit, Lemon" in prompt
        assert "- Base Notes: Patchouli, Vanilla" in prompt
        assert "- Sillage: moderate-heavy" in prompt

    def test_recommendation_request_text(self):
        """Test structured wizard answers render into preference text."""
        request = RecommendationRequest(
            gender=Gender.WOMEN,
            occasions=["Office", "Romantic"],
            seasons=["Spring"],
            budget="High",
            preferences="I love rose and vanilla",
        )

        text = request.to_prompt_text()

        assert "Gender: Women" in text
        assert "Occasion: Office, Romantic" in text
        assert "Season: Spring" in text
        assert "Budget: High" in text
        assert "I love rose and vanilla" in text


class TestParfumConsultant:
    """Test task operations against a fake LLM client."""

    def setup_method(self):
        """Set up test fixtures."""
        self.llm = Mock()
        self.llm.chat.return_value = LLMResponse(content="Model says hi")
        self.consultant = ParfumConsultant(self.llm, response_language="English")
        self.catalog = build_catalog()

    def test_recommend(self):
        """Test recommendation request shape and parameters."""
        result = self.consultant.recommend("Fresh citrus for the office", self.catalog)

        assert result == "Model says hi"
        messages = self.llm.chat.call_args[0][0]
        assert [m.role for m in messages] == ["system", "user"]
        assert '"name": "Bleu de Chanel"' in messages[0].content
        assert '"year_released"' not in messages[0].content
        assert "Fresh citrus for the office" in messages[1].content
        assert self.llm.chat.call_args[1] == {"temperature": 0.7, "max_tokens": 1500}

    def test_recommend_structured(self):
        """Test a RecommendationRequest is rendered before sending."""
        request = RecommendationRequest(gender=Gender.MEN, preferences="woody")

        self.consultant.recommend(request, self.catalog)

        messages = self.llm.chat.call_args[0][0]
        assert "Gender: Men" in messages[1].content

    def test_answer_question(self):
        """Test question answering sends the summary and the raw question."""
        result = self.consultant.answer_question("How do I make perfume last longer?", self.catalog)

        assert result == "Model says hi"
        messages = self.llm.chat.call_args[0][0]
        assert "Bleu de Chanel (Chanel) - Woody Aromatic, Men" in messages[0].content
        assert '"notes"' not in messages[0].content
        assert messages[1].content == "How do I make perfume last longer?"
        assert self.llm.chat.call_args[1]["max_tokens"] == 1200

    def test_compare(self):
        """Test comparison embeds both profiles and pins temperature."""
        result = self.consultant.compare("Bleu de Chanel", "Coco Mademoiselle", self.catalog)

        assert result == "Model says hi"
        messages = self.llm.chat.call_args[0][0]
        assert "Bleu de Chanel (Chanel):" in messages[0].content
        assert "Coco Mademoiselle (Chanel):" in messages[0].content
        assert "Bleu de Chanel vs Coco Mademoiselle" in messages[1].content
        assert self.llm.chat.call_args[1] == {"temperature": 0.7, "max_tokens": 1500}

    def test_compare_unknown_name(self):
        """Test an unknown name fails before any request is made."""
        with pytest.raises(NotFoundError) as exc_info:
            self.consultant.compare("Bleu de Chanel", "Aventus", self.catalog)

        assert exc_info.value.identifier == "Aventus"
        self.llm.chat.assert_not_called()

    def test_service_errors_propagate(self):
        """Test client errors reach the caller unchanged."""
        self.llm.chat.side_effect = ServiceError("DeepSeek API Error: 429 - Rate limit", status_code=429)

        with pytest.raises(ServiceError) as exc_info:
            self.consultant.answer_question("Hi?", self.catalog)

        assert exc_info.value.status_code == 429
