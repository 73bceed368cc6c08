from __future__ import annotations

import asyncio
import time
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError

from komorph.nlp.adapter import Morpheme, MorphemeAnalyzer
from komorph.nlp.errors import AnalysisTimeoutError, ConfigurationError
from komorph.services.extraction import (
    DEFAULT_KEYWORD_COUNT,
    NounCount,
    build_noun_frequency_map,
    extract_keywords,
    extract_noun_phrases,
    sorted_noun_counts,
    validate_keyword_count,
)
from komorph.services.similarity import dice_coefficient, weighted_overlap_score


class NounAnalysisUseCase:
    """Noun phrase, keyword and similarity operations over raw text.

    Analyzer failures propagate unchanged. ``timeout_seconds`` bounds every
    analyzer call, sync or async; the parallel similarity shares one deadline
    across both texts.
    """

    def __init__(
        self,
        analyzer: MorphemeAnalyzer,
        keyword_count: int = DEFAULT_KEYWORD_COUNT,
        timeout_seconds: float | None = None,
    ):
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ConfigurationError(f"timeout must be positive, got {timeout_seconds!r}")
        self._analyzer = analyzer
        self.keyword_count = validate_keyword_count(keyword_count)
        self.timeout_seconds = timeout_seconds

    def morphemes(self, text: str) -> list[Morpheme]:
        if self.timeout_seconds is None:
            return self._analyzer.parse(text)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="komorph-parse")
        try:
            return executor.submit(self._analyzer.parse, text).result(timeout=self.timeout_seconds)
        except FutureTimeoutError as exc:
            raise AnalysisTimeoutError(f"MeCab parse did not finish within {self.timeout_seconds}s") from exc
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    async def morphemes_async(self, text: str) -> list[Morpheme]:
        return await self._analyzer.parse_async(text, timeout=self.timeout_seconds)

    def extract_noun_phrases(self, text: str) -> list[str]:
        return extract_noun_phrases(self.morphemes(text))

    async def extract_noun_phrases_async(self, text: str) -> list[str]:
        return extract_noun_phrases(await self.morphemes_async(text))

    def extract_keywords(self, text: str, n: int | None = None) -> list[str]:
        count = self._keyword_count(n)
        return extract_keywords(self.morphemes(text), n=count)

    async def extract_keywords_async(self, text: str, n: int | None = None) -> list[str]:
        count = self._keyword_count(n)
        return extract_keywords(await self.morphemes_async(text), n=count)

    def build_noun_frequency_map(self, text: str) -> dict[str, int]:
        return build_noun_frequency_map(self.extract_noun_phrases(text))

    async def build_noun_frequency_map_async(self, text: str) -> dict[str, int]:
        return build_noun_frequency_map(await self.extract_noun_phrases_async(text))

    def extract_sorted_noun_counts(self, text: str) -> list[NounCount]:
        return sorted_noun_counts(self.build_noun_frequency_map(text))

    @staticmethod
    def similarity_score(noun_map_a: Mapping[str, int], noun_map_b: Mapping[str, int]) -> int:
        return weighted_overlap_score(noun_map_a, noun_map_b)

    @staticmethod
    def dice_coefficient(noun_map_a: Mapping[str, int], noun_map_b: Mapping[str, int]) -> float:
        return dice_coefficient(noun_map_a, noun_map_b)

    def noun_frequency_maps(self, text_a: str, text_b: str) -> tuple[dict[str, int], dict[str, int]]:
        executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="komorph-parse")
        try:
            future_a = executor.submit(self._parsed_noun_frequency_map, text_a)
            future_b = executor.submit(self._parsed_noun_frequency_map, text_b)
            deadline = None if self.timeout_seconds is None else time.monotonic() + self.timeout_seconds
            # A failing first branch raises before the second is read.
            noun_map_a = future_a.result(timeout=_remaining(deadline))
            noun_map_b = future_b.result(timeout=_remaining(deadline))
        except FutureTimeoutError as exc:
            raise AnalysisTimeoutError(
                f"Noun extraction did not finish within {self.timeout_seconds}s"
            ) from exc
        finally:
            # Do not block on a branch that is still running after a failure.
            executor.shutdown(wait=False, cancel_futures=True)
        return noun_map_a, noun_map_b

    async def noun_frequency_maps_async(self, text_a: str, text_b: str) -> tuple[dict[str, int], dict[str, int]]:
        noun_map_a, noun_map_b = await asyncio.gather(
            self.build_noun_frequency_map_async(text_a),
            self.build_noun_frequency_map_async(text_b),
        )
        return noun_map_a, noun_map_b

    def similarity_score_of_texts(self, text_a: str, text_b: str) -> int:
        return weighted_overlap_score(*self.noun_frequency_maps(text_a, text_b))

    async def similarity_score_of_texts_async(self, text_a: str, text_b: str) -> int:
        return weighted_overlap_score(*await self.noun_frequency_maps_async(text_a, text_b))

    def _parsed_noun_frequency_map(self, text: str) -> dict[str, int]:
        # Runs inside the parallel step, which enforces the deadline itself.
        return build_noun_frequency_map(extract_noun_phrases(self._analyzer.parse(text)))

    def _keyword_count(self, n: int | None) -> int:
        if n is None:
            return self.keyword_count
        return validate_keyword_count(n)


def _remaining(deadline: float | None) -> float | None:
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())
