from __future__ import annotations


class AnalyzerError(RuntimeError):
    """Base class for failures reported by the morphological analyzer."""


class InitializationError(AnalyzerError):
    """Raised when the analyzer model or tagger cannot be constructed."""


class AnalysisError(AnalyzerError):
    """Raised when a single parse call fails. The analyzer stays usable."""


class AnalysisTimeoutError(AnalysisError):
    """Raised when a parse call does not finish within the configured timeout."""


class ConfigurationError(ValueError):
    """Raised for invalid option values before the analyzer is invoked."""
