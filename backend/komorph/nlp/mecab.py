from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager, nullcontext
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version
from typing import TYPE_CHECKING

from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from komorph.nlp.adapter import Morpheme, MorphemeAnalyzer
from komorph.nlp.errors import AnalysisError, AnalysisTimeoutError, InitializationError
from komorph.nlp.morphemes import parse_mecab_output

if TYPE_CHECKING:
    from komorph.core.config import Settings


logger = logging.getLogger(__name__)

SUPPORTED_MECAB_VERSIONS = ">=0.996"


class MeCabAnalyzer(MorphemeAnalyzer):
    """Caller-owned handle on one MeCab model and tagger.

    The model and tagger are built once and shared by every call. Each parse
    gets its own lattice, which is released when the call returns or fails,
    so one analyzer can serve concurrent callers. Pass ``serialize=True`` for
    MeCab builds that are not safe to drive from several threads.
    """

    def __init__(self, args: str = "", serialize: bool = False):
        self.args = args or ""
        # Import lazily so the service can start degraded if the binding is absent.
        try:
            import MeCab
        except ImportError as exc:
            raise InitializationError(f"MeCab binding is not available - {exc}") from exc

        self._lock = threading.Lock() if serialize else None
        self.serialize = serialize

        try:
            self._model = MeCab.Model(self.args)
        except RuntimeError as exc:
            raise InitializationError(f"Failed to create a new model - {exc}") from exc
        if self._model is None:
            raise InitializationError("Failed to create a new model")

        try:
            self._tagger = self._model.createTagger()
        except RuntimeError as exc:
            self._model = None
            raise InitializationError(f"Failed to create a new tagger - {exc}") from exc
        if self._tagger is None:
            self._model = None
            raise InitializationError("Failed to create a new tagger")

        self.mecab_version = str(getattr(MeCab, "VERSION", "") or "")
        self._warn_if_mecab_version_unsupported()
        logger.info(
            "mecab_analyzer_initialized",
            extra={"mecab_args": self.args, "mecab": self.mecab_version, "serialize": serialize},
        )

    def __enter__(self) -> MeCabAnalyzer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._tagger is None

    def parse(self, text: str) -> list[Morpheme]:
        return parse_mecab_output(self.parse_to_string(text))

    def parse_to_string(self, text: str) -> str:
        # close() may run while this call is in flight; keep our own references.
        model, tagger = self._model, self._tagger
        if model is None or tagger is None:
            raise AnalysisError("MeCab analyzer is closed")

        with self._lock or nullcontext():
            with _lattice(model) as lattice:
                lattice.set_sentence(text)
                if not tagger.parse(lattice):
                    raise AnalysisError(f"Failed to parse the sentence - {lattice.what()}")
                output = lattice.toString()

        if output is None:
            raise AnalysisError("MeCab returned no output for the sentence")
        return output

    async def parse_async(self, text: str, timeout: float | None = None) -> list[Morpheme]:
        call = asyncio.to_thread(self.parse, text)
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as exc:
            raise AnalysisTimeoutError(f"MeCab parse did not finish within {timeout}s") from exc

    def metadata(self) -> dict[str, str]:
        try:
            binding_version = package_version("mecab-python3")
        except PackageNotFoundError:
            binding_version = "unknown"
        return {
            "adapter": self.__class__.__name__,
            "mecab": self.mecab_version or "unknown",
            "mecab-python3": binding_version,
            "args": self.args,
        }

    def close(self) -> None:
        self._tagger = None
        self._model = None

    def _warn_if_mecab_version_unsupported(self) -> None:
        if not self.mecab_version:
            return

        try:
            runtime_version = Version(self.mecab_version)
        except InvalidVersion:
            logger.warning(
                "mecab_version_parse_failed",
                extra={"mecab": self.mecab_version, "supported": SUPPORTED_MECAB_VERSIONS},
            )
            return

        if SpecifierSet(SUPPORTED_MECAB_VERSIONS).contains(runtime_version, prereleases=True):
            return

        logger.warning(
            "mecab_version_unsupported",
            extra={"mecab": self.mecab_version, "supported": SUPPORTED_MECAB_VERSIONS},
        )


@contextmanager
def _lattice(model) -> Iterator[object]:
    try:
        lattice = model.createLattice()
    except RuntimeError as exc:
        raise AnalysisError(f"Failed to create a new lattice - {exc}") from exc
    if lattice is None:
        raise AnalysisError("Failed to create a new lattice")
    try:
        yield lattice
    finally:
        lattice.clear()


def load_mecab_analyzer(settings: Settings) -> MeCabAnalyzer:
    return MeCabAnalyzer(args=settings.mecab_args, serialize=settings.serialize_parses)
