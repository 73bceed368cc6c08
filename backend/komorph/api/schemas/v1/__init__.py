from komorph.api.schemas.v1.analyze import (
    AnalyzeRequest,
    AnalyzeResponse,
    KeywordsRequest,
    KeywordsResponse,
    MorphemeItem,
    NounCountItem,
    SimilarityRequest,
    SimilarityResponse,
)

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "KeywordsRequest",
    "KeywordsResponse",
    "MorphemeItem",
    "NounCountItem",
    "SimilarityRequest",
    "SimilarityResponse",
]
