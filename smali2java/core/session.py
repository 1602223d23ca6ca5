"""
File Translation Session
=========================

Drives the translation of a single smali file: opens the file, feeds
every line in order to the :class:`InstructionDispatcher`, and returns
an isolated :class:`FileTranslationResult`.

Lines are processed strictly sequentially -- later lines depend on the
output unit state left by earlier ones (the superclass rewrite, the
class name used by constructors).
"""

from __future__ import annotations

from pathlib import Path

from shared.logger import Smali2JavaLogger

from smali2java.core.models import (
    FileTranslationResult,
    MalformedInstruction,
    OutputUnit,
    TokenizedInstruction,
    TranslationStatus,
)
from smali2java.parsers.dispatcher import InstructionDispatcher


class FileTranslationSession:
    """Translate one file into one :class:`OutputUnit`.

    A session is single-use and owns its output unit; sessions for
    different files share nothing but the (stateless) dispatcher.

    Args:
        path: File to translate.
        dispatcher: Instruction dispatcher to apply to each line.
        root: Scanned root directory, used for the relative path.
        encoding: Text encoding of the file.
        logger: Logger instance.  A new one is created if not provided.
    """

    def __init__(
        self,
        path: str | Path,
        dispatcher: InstructionDispatcher,
        *,
        root: str | Path | None = None,
        encoding: str = "utf-8",
        logger: Smali2JavaLogger | None = None,
    ) -> None:
        self._path = Path(path)
        self._dispatcher = dispatcher
        self._root = Path(root) if root is not None else self._path.parent
        self._encoding = encoding
        self._logger = logger or Smali2JavaLogger("session")

    @property
    def relative_path(self) -> str:
        try:
            return self._path.relative_to(self._root).as_posix()
        except ValueError:
            return self._path.name

    def run(self) -> FileTranslationResult:
        """Translate the file.

        Read and parse failures are reported in the returned result
        rather than raised, so one bad file never takes down its
        siblings.
        """
        result = FileTranslationResult(
            path=str(self._path.resolve()),
            relative_path=self.relative_path,
        )
        unit = OutputUnit(source_path=result.relative_path)

        self._logger.info("Processing %s", self._path)
        try:
            with open(self._path, "r", encoding=self._encoding) as fh:
                for number, raw in enumerate(fh, start=1):
                    result.input_lines = number
                    self._dispatcher.dispatch(
                        unit, TokenizedInstruction.from_line(raw, number)
                    )
        except MalformedInstruction as exc:
            result.status = TranslationStatus.MALFORMED
            result.error = str(exc)
            self._logger.error("%s: %s", self._path, exc)
            return result
        except (OSError, UnicodeDecodeError) as exc:
            result.status = TranslationStatus.IO_ERROR
            result.error = f"{type(exc).__name__}: {exc}"
            self._logger.error("Cannot read %s: %s", self._path, exc)
            return result

        if unit.passthrough_count:
            self._logger.debug(
                "%s: %d of %d lines passed through untranslated",
                result.relative_path,
                unit.passthrough_count,
                len(unit.lines),
            )
        result.unit = unit
        return result
