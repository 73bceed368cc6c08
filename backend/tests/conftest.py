from __future__ import annotations

import pytest

from komorph.nlp.adapter import Morpheme
from komorph.nlp.morphemes import parse_mecab_output


def mecab_line(surface: str, tag: str, flag: str = "*") -> str:
    return f"{surface}\t{tag},*,*,{flag},*"


def mecab_output(*lines: str) -> str:
    return "".join(f"{line}\n" for line in lines) + "EOS\n"


class StubAnalyzer:
    def __init__(self, outputs: dict[str, str] | None = None):
        self.outputs = outputs or {}
        self.calls: list[str] = []
        self.closed = False

    def parse(self, text: str) -> list[Morpheme]:
        self.calls.append(text)
        return parse_mecab_output(self.outputs.get(text, "EOS\n"))

    async def parse_async(self, text: str, timeout: float | None = None) -> list[Morpheme]:
        return self.parse(text)

    def metadata(self) -> dict[str, str]:
        return {"adapter": "StubAnalyzer"}

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def stub_analyzer_factory():
    return lambda _settings: StubAnalyzer()
