from __future__ import annotations

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    text: str = Field(...)


class MorphemeItem(BaseModel):
    surface: str
    tag: str
    features: list[str] = Field(default_factory=list)


class NounCountItem(BaseModel):
    noun: str
    count: int


class AnalyzeResponse(BaseModel):
    morphemes: list[MorphemeItem]
    noun_phrases: list[str]
    keywords: list[str]
    noun_counts: list[NounCountItem]


class KeywordsRequest(BaseModel):
    text: str = Field(...)
    n: int | None = Field(default=None, ge=1)


class KeywordsResponse(BaseModel):
    keywords: list[str]


class SimilarityRequest(BaseModel):
    text_a: str = Field(...)
    text_b: str = Field(...)


class SimilarityResponse(BaseModel):
    # Unnormalized weighted overlap; grows with text length.
    score: int
    dice: float
