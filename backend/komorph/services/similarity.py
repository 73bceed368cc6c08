from __future__ import annotations

from collections.abc import Mapping


def weighted_overlap_score(noun_map_a: Mapping[str, int], noun_map_b: Mapping[str, int]) -> int:
    """Sum of ``count_a * count_b`` over the nouns of ``noun_map_a``.

    Historically published as a "dice coefficient", but it is not normalized:
    the value grows with the length of both texts and is not comparable to a
    Dice coefficient. Use :func:`dice_coefficient` for a score in ``[0, 1]``.
    """
    score = 0
    for noun, count_a in noun_map_a.items():
        score += count_a * noun_map_b.get(noun, 0)
    return score


similarity_score = weighted_overlap_score


def dice_coefficient(noun_map_a: Mapping[str, int], noun_map_b: Mapping[str, int]) -> float:
    total = sum(noun_map_a.values()) + sum(noun_map_b.values())
    if total == 0:
        return 0.0
    shared = sum(min(count, noun_map_b.get(noun, 0)) for noun, count in noun_map_a.items())
    return 2 * shared / total
