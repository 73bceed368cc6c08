from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, HTTPException, Request

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
from komorph.nlp.errors import AnalysisError, AnalysisTimeoutError, ConfigurationError
from komorph.services.extraction import (
    build_noun_frequency_map,
    extract_keywords,
    extract_noun_phrases,
    sorted_noun_counts,
)
from komorph.services.use_cases.analyze import NounAnalysisUseCase

router = APIRouter()
logger = logging.getLogger(__name__)


def _use_case(request: Request) -> NounAnalysisUseCase:
    analyzer = getattr(request.app.state, "analyzer", None)
    if not bool(getattr(request.app.state, "nlp_ready", False)) or analyzer is None:
        raise HTTPException(
            status_code=503,
            detail="Analyzer unavailable. Check backend logs and MeCab installation.",
        )
    settings = request.app.state.settings
    return NounAnalysisUseCase(
        analyzer,
        keyword_count=settings.keyword_count,
        timeout_seconds=settings.parse_timeout_seconds,
    )


@contextmanager
def _analysis_errors(event: str) -> Iterator[None]:
    try:
        yield
    except ConfigurationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except AnalysisTimeoutError as exc:
        logger.exception(f"{event}_timeout")
        raise HTTPException(status_code=504, detail=str(exc)) from exc
    except AnalysisError as exc:
        logger.exception(f"{event}_failed")
        raise HTTPException(status_code=502, detail=f"Analysis failed: {exc}") from exc


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze_text(payload: AnalyzeRequest, request: Request) -> AnalyzeResponse:
    use_case = _use_case(request)
    with _analysis_errors("analyze"):
        morphemes = use_case.morphemes(payload.text)
        noun_phrases = extract_noun_phrases(morphemes)
        keywords = extract_keywords(morphemes, n=use_case.keyword_count)

    return AnalyzeResponse(
        morphemes=[
            MorphemeItem(surface=morpheme.surface, tag=morpheme.tag, features=list(morpheme.features))
            for morpheme in morphemes
        ],
        noun_phrases=noun_phrases,
        keywords=keywords,
        noun_counts=[
            NounCountItem(noun=item.noun, count=item.count)
            for item in sorted_noun_counts(build_noun_frequency_map(noun_phrases))
        ],
    )


@router.post("/keywords", response_model=KeywordsResponse)
def keywords(payload: KeywordsRequest, request: Request) -> KeywordsResponse:
    use_case = _use_case(request)
    with _analysis_errors("keywords"):
        return KeywordsResponse(keywords=use_case.extract_keywords(payload.text, n=payload.n))


@router.post("/similarity", response_model=SimilarityResponse)
async def similarity(payload: SimilarityRequest, request: Request) -> SimilarityResponse:
    use_case = _use_case(request)
    with _analysis_errors("similarity"):
        noun_map_a, noun_map_b = await use_case.noun_frequency_maps_async(payload.text_a, payload.text_b)

    return SimilarityResponse(
        score=use_case.similarity_score(noun_map_a, noun_map_b),
        dice=use_case.dice_coefficient(noun_map_a, noun_map_b),
    )
