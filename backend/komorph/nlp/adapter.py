from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


NON_COMPOUND_FLAG = "*"
# Fifth field of the flat record: surface, tag, then the features below.
COMPOUND_FLAG_INDEX = 2


@dataclass(frozen=True)
class Morpheme:
    surface: str
    tag: str
    features: tuple[str, ...] = ()

    def feature(self, index: int) -> str | None:
        # Missing trailing slots are absent, not "*".
        if 0 <= index < len(self.features):
            return self.features[index]
        return None

    @property
    def is_compound(self) -> bool:
        flag = self.feature(COMPOUND_FLAG_INDEX)
        return flag is not None and flag != NON_COMPOUND_FLAG


class MorphemeAnalyzer(Protocol):
    def parse(self, text: str) -> list[Morpheme]:
        ...

    async def parse_async(self, text: str, timeout: float | None = None) -> list[Morpheme]:
        ...

    def metadata(self) -> dict[str, str]:
        ...

    def close(self) -> None:
        ...
