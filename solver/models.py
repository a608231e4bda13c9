"""Domain models for problems and the results generated for them."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ICON = "fas fa-lightbulb"
FALLBACK_ICON = "fas fa-robot"
FALLBACK_TITLE = "AI Solution Approach"


class Problem(BaseModel):
    """A submitted problem. Frozen once built."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    description: str
    domain: str = "general"
    complexity: int = Field(default=3, ge=1, le=5)
    context: str = ""
    stakeholders: str | None = None
    root_causes: str | None = None
    impact: str | None = None

    @field_validator("stakeholders", "root_causes", "impact")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return value or None


class ReframingTechnique(str, Enum):
    INVERSION = "inversion"
    SYSTEMS_THINKING = "systems-thinking"
    RANDOM_ASSOCIATION = "random-association"


class Reframing(BaseModel):
    text: str
    technique: ReframingTechnique | None = None


class Solution(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    content: str = ""
    icon: str = DEFAULT_ICON
    is_ai: bool = Field(default=False, alias="isAI")


class EnhancementCategory(str, Enum):
    ELABORATE = "Elaborate"
    EXAMPLES = "Give examples"
    ACTION_STEPS = "Create action steps"
    METRICS = "Suggest metrics"


class Enhancement(BaseModel):
    solution_title: str
    category: str
    text: str
    html: str


class ParseStatus(str, Enum):
    PARSED = "parsed"        # the whole reply was JSON
    EXTRACTED = "extracted"  # a JSON array was cut out of surrounding prose
    FALLBACK = "fallback"    # nothing usable; a synthetic record wraps the raw text


class SolutionSet(BaseModel):
    solutions: list[Solution]
    status: ParseStatus


class ReframingSet(BaseModel):
    reframings: list[Reframing]
    status: ParseStatus

    @property
    def texts(self) -> list[str]:
        return [r.text for r in self.reframings]
