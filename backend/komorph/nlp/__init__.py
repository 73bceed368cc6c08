from komorph.nlp.adapter import Morpheme, MorphemeAnalyzer
from komorph.nlp.errors import (
    AnalysisError,
    AnalysisTimeoutError,
    AnalyzerError,
    ConfigurationError,
    InitializationError,
)
from komorph.nlp.mecab import MeCabAnalyzer, load_mecab_analyzer
from komorph.nlp.morphemes import parse_mecab_output

__all__ = [
    "AnalysisError",
    "AnalysisTimeoutError",
    "AnalyzerError",
    "ConfigurationError",
    "InitializationError",
    "MeCabAnalyzer",
    "Morpheme",
    "MorphemeAnalyzer",
    "load_mecab_analyzer",
    "parse_mecab_output",
]
