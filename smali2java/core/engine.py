"""
Smali2Java Translation Engine
==============================

Orchestrates translation of a whole directory tree: discovers every
smali file under the root, runs one :class:`FileTranslationSession` per
file concurrently, waits for all of them, and aggregates the isolated
per-file results into a :class:`TranslationRun`.

Pipeline:
    1. Discover files with the configured extension (sorted, recursive)
    2. Fan out one task per file onto the default thread-pool executor,
       bounded by ``global.max_workers``
    3. Join on all tasks (``asyncio.gather``)
    4. Convert failures into ERROR diagnostics and summarise

Output order across files follows discovery order, not completion
order.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from shared.config import Smali2JavaConfig
from shared.logger import Smali2JavaLogger
from shared.models import Diagnostic, RunResult, Severity

from smali2java.core.models import (
    FileTranslationResult,
    TranslationAborted,
    TranslationRun,
    TranslationStatus,
)
from smali2java.core.session import FileTranslationSession
from smali2java.parsers.dispatcher import InstructionDispatcher


_DIAGNOSTIC_TITLES: dict[TranslationStatus, str] = {
    TranslationStatus.MALFORMED: "Malformed instruction",
    TranslationStatus.IO_ERROR: "File could not be read",
}


class TranslationEngine:
    """Translate every smali file below a root directory.

    Usage::

        engine = TranslationEngine()
        run = await engine.translate("./smali")
        for file in run.succeeded:
            print(file.unit.render())

    Or synchronously::

        run = engine.translate_sync("./smali")
    """

    def __init__(
        self,
        config: Smali2JavaConfig | None = None,
        logger: Smali2JavaLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: Toolkit configuration.  Defaults are used if not provided.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._config: Smali2JavaConfig = config or Smali2JavaConfig()
        self._logger: Smali2JavaLogger = logger or Smali2JavaLogger("engine")
        self._dispatcher = InstructionDispatcher(
            static_field_reads=self._config.translator.static_field_reads,
        )

    @property
    def dispatcher(self) -> InstructionDispatcher:
        return self._dispatcher

    @property
    def extension(self) -> str:
        """Configured input extension, with its leading dot."""
        extension = self._config.translator.extension
        return extension if extension.startswith(".") else f".{extension}"

    # ------------------------------------------------------------------ #
    #  Discovery
    # ------------------------------------------------------------------ #

    def discover(self, root: str | Path) -> list[Path]:
        """Return every file below *root* with the configured extension.

        A *root* that is itself a matching file yields just that file.

        Raises:
            FileNotFoundError: If *root* does not exist.
        """
        root_path = Path(root)
        extension = self.extension
        if not root_path.exists():
            raise FileNotFoundError(f"No such file or directory: {root_path}")
        if root_path.is_file():
            return [root_path] if root_path.suffix == extension else []
        return sorted(
            p for p in root_path.rglob(f"*{extension}")
            if p.is_file() and p.suffix == extension
        )

    # ------------------------------------------------------------------ #
    #  Translation
    # ------------------------------------------------------------------ #

    def translate_file(
        self,
        path: str | Path,
        root: str | Path | None = None,
    ) -> FileTranslationResult:
        """Translate a single file synchronously."""
        session = FileTranslationSession(
            path,
            self._dispatcher,
            root=root,
            encoding=self._config.translator.encoding,
            logger=self._logger,
        )
        return session.run()

    async def translate(self, root: str | Path | None = None) -> TranslationRun:
        """Translate every discovered file below *root* concurrently.

        Args:
            root: Directory (or single file) to scan.  Defaults to
                  ``translator.root`` from the configuration.

        Returns:
            The aggregated run.  Failed files are reported in it rather
            than raised.

        Raises:
            FileNotFoundError: If *root* does not exist.
            TranslationAborted: In fail-fast mode, once every task has
                finished, if any file failed.
        """
        root_path = Path(root if root is not None else self._config.translator.root)
        run = TranslationRun(
            result=RunResult(tool_name="smali2java", target=str(root_path)),
        )

        files = self.discover(root_path)
        base = root_path if root_path.is_dir() else root_path.parent
        self._logger.info(
            "Discovered %d %s file(s) under %s",
            len(files),
            self.extension,
            root_path,
        )

        limit = asyncio.Semaphore(max(1, self._config.global_settings.max_workers))
        loop = asyncio.get_running_loop()

        async def _bounded(path: Path) -> FileTranslationResult:
            async with limit:
                return await loop.run_in_executor(
                    None, self.translate_file, path, base
                )

        with self._logger.operation(str(root_path)), self._logger.timed(
            f"translate {len(files)} file(s)"
        ):
            run.files = list(await asyncio.gather(*(_bounded(p) for p in files)))

        for file in run.failed:
            run.result.add_diagnostic(
                Diagnostic(
                    severity=Severity.ERROR,
                    title=_DIAGNOSTIC_TITLES[file.status],
                    description=file.error,
                    path=file.relative_path,
                )
            )

        run.result.metadata = {
            "files": len(run.files),
            "succeeded": len(run.succeeded),
            "failed": len(run.failed),
            "output_lines": sum(f.output_lines for f in run.files),
            "passthrough_lines": sum(
                f.unit.passthrough_count for f in run.succeeded if f.unit is not None
            ),
        }
        run.result.finalize(
            f"Translated {len(run.succeeded)}/{len(run.files)} file(s), "
            f"{len(run.failed)} failed"
        )
        self._logger.info(run.result.summary)

        if run.failed and self._config.translator.fail_fast:
            first = run.failed[0]
            raise TranslationAborted(f"{first.relative_path}: {first.error}")

        return run

    def translate_sync(self, root: str | Path | None = None) -> TranslationRun:
        """Synchronous wrapper around :meth:`translate`.

        Runs the coroutine on a fresh event loop, or on a helper thread
        when called from inside a running loop.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop and loop.is_running():
            import concurrent.futures
            with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
                future = pool.submit(asyncio.run, self.translate(root))
                return future.result()
        return asyncio.run(self.translate(root))
