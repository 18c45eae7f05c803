from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel)


class RoadmapItem(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, strict=True)

    skill: str
    why: str
    resource: str
    priority: Literal["High", "Medium", "Low"]


class AnalysisResult(_CamelModel):
    """Shape the model is asked to return. Only enforced in strict mode.

    Keys must be camelCase and values must already have the right JSON type.
    """
    model_config = ConfigDict(alias_generator=to_camel, strict=True)

    match_score: int = Field(..., ge=0, le=100)
    verdict: str
    matched_skills: list[str]
    missing_skills: list[str]
    roadmap: list[RoadmapItem]
    tips: list[str]


class ErrorResponse(_CamelModel):
    error: str
    raw_excerpt: str | None = None
