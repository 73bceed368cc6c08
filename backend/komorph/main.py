from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from komorph.api.router import api_router
from komorph.core.config import Settings, load_settings
from komorph.core.logging import configure_logging
from komorph.nlp.adapter import MorphemeAnalyzer

logger = logging.getLogger(__name__)


def _default_analyzer_factory(settings: Settings) -> MorphemeAnalyzer:
    # Import lazily so a missing MeCab binding degrades health instead of crashing import.
    from komorph.nlp.mecab import load_mecab_analyzer

    return load_mecab_analyzer(settings)


def create_app(
    settings: Settings | None = None,
    analyzer_factory: Callable[[Settings], MorphemeAnalyzer] = _default_analyzer_factory,
) -> FastAPI:
    app_settings = settings or load_settings()
    configure_logging(app_settings.log_level, service=app_settings.app_name)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        analyzer: MorphemeAnalyzer | None = None
        try:
            analyzer = analyzer_factory(app_settings)
            app.state.nlp_ready = True
            app.state.nlp_error = None
        except Exception as exc:
            app.state.nlp_ready = False
            app.state.nlp_error = str(exc)
            logger.exception(
                "backend_analyzer_startup_failed",
                extra={"mecab_args": app_settings.mecab_args},
            )
        app.state.analyzer = analyzer

        logger.info(
            "backend_startup",
            extra={
                "status": "ok" if app.state.nlp_ready else "degraded",
                "environment": app_settings.environment,
                "host": app_settings.host,
                "port": app_settings.port,
                "keyword_count": app_settings.keyword_count,
                "parse_timeout_seconds": app_settings.parse_timeout_seconds,
                "nlp_error": app.state.nlp_error,
                "nlp": analyzer.metadata() if analyzer else None,
            },
        )
        try:
            yield
        finally:
            if analyzer is not None:
                analyzer.close()
            app.state.analyzer = None
            app.state.nlp_ready = False
            logger.info("backend_shutdown")

    app = FastAPI(title="Komorph Backend", version="0.1.0", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.nlp_ready = False
    app.state.nlp_error = None
    app.state.analyzer = None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app_settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()
