from komorph.services.use_cases.analyze import NounAnalysisUseCase

__all__ = ["NounAnalysisUseCase"]
