from komorph.api.schemas.v1 import (
    AnalyzeRequest,
    AnalyzeResponse,
    KeywordsRequest,
    KeywordsResponse,
    SimilarityRequest,
    SimilarityResponse,
)

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "KeywordsRequest",
    "KeywordsResponse",
    "SimilarityRequest",
    "SimilarityResponse",
]
