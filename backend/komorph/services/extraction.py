from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from komorph.nlp.adapter import NON_COMPOUND_FLAG, COMPOUND_FLAG_INDEX, Morpheme
from komorph.nlp.errors import ConfigurationError


# Tags come from the analyzer dictionary and are compared literally.
NOUN_TAG = "NN"
NUMBER_TAG = "SN"
ADJECTIVE_STEM_TAG = "VA"
ADNOMINAL_ENDING_TAG = "ETM"
ADNOMINAL_ADJECTIVE_TAG = "VA+ETM"

_NOUN_PAIR_PREVIOUS_TAGS = frozenset({NUMBER_TAG, NOUN_TAG, ADNOMINAL_ADJECTIVE_TAG})
_MIN_KEYWORD_RUN = 2

DEFAULT_KEYWORD_COUNT = 3


@dataclass(frozen=True)
class NounCount:
    noun: str
    count: int


def validate_keyword_count(n: object) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n < 1:
        raise ConfigurationError(f"keyword count must be a positive integer, got {n!r}")
    return n


def extract_noun_phrases(morphemes: Sequence[Morpheme]) -> list[str]:
    """Collect noun phrases anchored on every ``NN`` morpheme.

    For each noun, in order: the pair with the previous morpheme when that one
    is a number, a noun or an adnominal adjective; the ``VA`` + ``ETM`` stem
    glued to its ending followed by the noun; the noun on its own. Duplicates
    are kept so the result can feed a frequency count.
    """
    phrases: list[str] = []
    for index, morpheme in enumerate(morphemes):
        if morpheme.tag != NOUN_TAG:
            continue

        if index > 0:
            previous = morphemes[index - 1]
            if previous.tag in _NOUN_PAIR_PREVIOUS_TAGS:
                phrases.append(f"{previous.surface} {morpheme.surface}")
            if index > 1:
                before_previous = morphemes[index - 2]
                if before_previous.tag == ADJECTIVE_STEM_TAG and previous.tag == ADNOMINAL_ENDING_TAG:
                    phrases.append(f"{before_previous.surface}{previous.surface} {morpheme.surface}")

        phrases.append(morpheme.surface)
    return phrases


def _is_keyword_noun(morpheme: Morpheme) -> bool:
    return (
        morpheme.tag == NOUN_TAG
        and len(morpheme.surface) > 1
        and morpheme.feature(COMPOUND_FLAG_INDEX) == NON_COMPOUND_FLAG
    )


def keyword_candidates(morphemes: Iterable[Morpheme]) -> list[str]:
    candidates: list[str] = []
    run: list[str] = []
    pending_number = ""
    for morpheme in morphemes:
        if morpheme.tag == NUMBER_TAG:
            pending_number = morpheme.surface
        elif _is_keyword_noun(morpheme):
            run.append(f"{pending_number}{morpheme.surface}")
            pending_number = ""
        else:
            if len(run) >= _MIN_KEYWORD_RUN:
                candidates.append(" ".join(run))
            run = []
            pending_number = ""
    # A run still open at the end of the sentence is dropped.
    return candidates


def extract_keywords(morphemes: Iterable[Morpheme], n: int = DEFAULT_KEYWORD_COUNT) -> list[str]:
    n = validate_keyword_count(n)
    unique = list(dict.fromkeys(keyword_candidates(morphemes)))[:n]
    # Truncate first, then order by length; sorted() is stable for ties.
    return sorted(unique, key=len, reverse=True)


def build_noun_frequency_map(nouns: Iterable[str]) -> dict[str, int]:
    return dict(Counter(nouns))


def sorted_noun_counts(noun_map: Mapping[str, int]) -> list[NounCount]:
    counts = [NounCount(noun=noun, count=count) for noun, count in noun_map.items()]
    counts.sort(key=lambda item: item.count, reverse=True)
    return counts
