from __future__ import annotations

import time

import pytest
from fastapi.testclient import TestClient

from conftest import StubAnalyzer, mecab_line, mecab_output
from komorph.core.config import Settings
from komorph.main import create_app
from komorph.nlp.adapter import Morpheme
from komorph.nlp.errors import AnalysisError, AnalysisTimeoutError


OUTPUTS = {
    "서울 대학교 도서관에": mecab_output(
        mecab_line("서울", "NN"),
        mecab_line("대학교", "NN"),
        mecab_line("도서관", "NN"),
        mecab_line("에", "JKB"),
    ),
    "맛있는 음식": mecab_output(
        mecab_line("맛", "VA"),
        mecab_line("있", "ETM"),
        mecab_line("음식", "NN"),
    ),
    "서울 음식": mecab_output(
        mecab_line("서울", "NN"),
        mecab_line("음식", "NN"),
    ),
}


class ErrorAnalyzer(StubAnalyzer):
    def __init__(self, error: Exception):
        super().__init__(OUTPUTS)
        self.error = error

    def parse(self, text: str) -> list[Morpheme]:
        raise self.error

    async def parse_async(self, text: str, timeout: float | None = None) -> list[Morpheme]:
        raise self.error


def _settings(**overrides) -> Settings:
    values = {
        "environment": "test",
        "app_name": "komorph-backend-test",
        "host": "127.0.0.1",
        "port": 8001,
        "keyword_count": 3,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def analysis_client():
    app = create_app(settings=_settings(), analyzer_factory=lambda _settings: StubAnalyzer(OUTPUTS))
    with TestClient(app) as client:
        yield client


def test_analyze_returns_morphemes_phrases_keywords_and_counts(analysis_client: TestClient) -> None:
    response = analysis_client.post("/api/analyze", json={"text": "서울 대학교 도서관에"})

    assert response.status_code == 200
    payload = response.json()
    assert [item["surface"] for item in payload["morphemes"]] == ["서울", "대학교", "도서관", "에"]
    assert payload["morphemes"][0] == {"surface": "서울", "tag": "NN", "features": ["*", "*", "*", "*"]}
    assert payload["noun_phrases"] == [
        "서울",
        "서울 대학교",
        "대학교",
        "대학교 도서관",
        "도서관",
    ]
    assert payload["keywords"] == ["서울 대학교 도서관"]
    assert payload["noun_counts"][0] == {"noun": "서울", "count": 1}
    assert len(payload["noun_counts"]) == 5


def test_analyze_empty_text_returns_empty_lists(analysis_client: TestClient) -> None:
    response = analysis_client.post("/api/analyze", json={"text": ""})

    assert response.status_code == 200
    assert response.json() == {"morphemes": [], "noun_phrases": [], "keywords": [], "noun_counts": []}


def test_keywords_endpoint_honours_requested_count(analysis_client: TestClient) -> None:
    response = analysis_client.post("/api/keywords", json={"text": "서울 대학교 도서관에", "n": 1})

    assert response.status_code == 200
    assert response.json() == {"keywords": ["서울 대학교 도서관"]}


def test_keywords_endpoint_rejects_non_positive_count(analysis_client: TestClient) -> None:
    response = analysis_client.post("/api/keywords", json={"text": "서울", "n": 0})

    assert response.status_code == 422


def test_similarity_endpoint_returns_overlap_and_dice(analysis_client: TestClient) -> None:
    response = analysis_client.post(
        "/api/similarity",
        json={"text_a": "맛있는 음식", "text_b": "서울 음식"},
    )

    assert response.status_code == 200
    payload = response.json()
    # "맛있 음식" + "음식" against "서울" + "서울 음식" + "음식".
    assert payload["score"] == 1
    assert payload["dice"] == pytest.approx(2 * 1 / 5)


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (AnalysisError("Failed to parse the sentence - lattice error"), 502),
        (AnalysisTimeoutError("MeCab parse did not finish within 1s"), 504),
    ],
)
def test_analysis_failures_map_to_gateway_errors(error: Exception, status_code: int) -> None:
    app = create_app(settings=_settings(), analyzer_factory=lambda _settings: ErrorAnalyzer(error))
    with TestClient(app) as client:
        analyze = client.post("/api/analyze", json={"text": "서울"})
        similarity = client.post("/api/similarity", json={"text_a": "서울", "text_b": "음식"})

    assert analyze.status_code == status_code
    assert similarity.status_code == status_code
    assert str(error) in analyze.json()["detail"]


class SlowParseAnalyzer(StubAnalyzer):
    def parse(self, text: str) -> list[Morpheme]:
        time.sleep(0.2)
        return super().parse(text)


def test_sync_routes_time_out_with_configured_parse_timeout() -> None:
    settings = _settings(parse_timeout_seconds=0.01)
    app = create_app(settings=settings, analyzer_factory=lambda _settings: SlowParseAnalyzer(OUTPUTS))
    with TestClient(app) as client:
        keywords = client.post("/api/keywords", json={"text": "서울 대학교 도서관에"})
        analyze = client.post("/api/analyze", json={"text": "서울 대학교 도서관에"})

    assert keywords.status_code == 504
    assert analyze.status_code == 504
