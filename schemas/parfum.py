"""Catalog record schemas."""

from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    """Target wearer of a parfum."""
    MEN = "Men"
    WOMEN = "Women"
    UNISEX = "Unisex"


class PriceRange(str, Enum):
    """Price band."""
    LOW = "low"
    MEDIUM = "medium"
    MEDIUM_HIGH = "medium-high"
    HIGH = "high"
    LUXURY = "luxury"


class Sillage(str, Enum):
    """Projection intensity."""
    LIGHT = "light"
    MODERATE = "moderate"
    MODERATE_HEAVY = "moderate-heavy"
    HEAVY = "heavy"


class Notes(BaseModel):
    """Fragrance pyramid, each layer in order of prominence."""

    model_config = ConfigDict(extra="allow")

    top: list[str] = Field(default_factory=list)
    middle: list[str] = Field(default_factory=list)
    base: list[str] = Field(default_factory=list)


class ParfumFields(BaseModel):
    """Everything that describes a parfum except its catalog id."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    brand: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    gender: Gender
    notes: Notes
    description: str = ""
    price_range: PriceRange
    longevity: str = ""
    season: str = ""
    occasion: str = ""
    sillage: Sillage
    year_released: int = Field(..., ge=1000, le=9999, strict=True)


class Parfum(ParfumFields):
    """A catalog record."""

    id: str = Field(..., pattern=r"^\d+$", description="Decimal numeral, unique in the catalog")

    def to_record(self) -> dict[str, Any]:
        """Dump to the on-disk JSON shape with the id leading."""
        data = self.model_dump(mode="json")
        return {"id": data.pop("id"), **data}


class CatalogDocument(BaseModel):
    """The whole catalog file."""

    model_config = ConfigDict(extra="allow")

    parfums: list[Parfum] = Field(default_factory=list)
    brands: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)

    def to_json_dict(self) -> dict[str, Any]:
        """Dump to the on-disk JSON shape."""
        data = self.model_dump(mode="json")
        data["parfums"] = [p.to_record() for p in self.parfums]
        return data


class CatalogStats(BaseModel):
    """Summary counts over the catalog."""
    total_parfums: int = 0
    total_brands: int = 0
    total_categories: int = 0
    gender_distribution: dict[str, int] = Field(default_factory=dict)
    price_distribution: dict[str, int] = Field(default_factory=dict)


class RecommendationRequest(BaseModel):
    """Structured answers collected by the recommendation wizard."""
    gender: Gender = Gender.UNISEX
    occasions: list[str] = Field(default_factory=list)
    seasons: list[str] = Field(default_factory=list)
    budget: str = "Any"
    preferences: str = ""

    def to_prompt_text(self) -> str:
        """Render as the preference block sent to the model."""
        return (
            f"Gender: {self.gender.value}\n"
            f"Occasion: {', '.join(self.occasions) or '-'}\n"
            f"Season: {', '.join(self.seasons) or '-'}\n"
            f"Budget: {self.budget}\n"
            f"Additional preferences: {self.preferences or '-'}"
        )
