"""
Translation Report Generator
=============================

Writes translation results to disk: one ``.java`` file per translated
input (mirroring the input tree) and an optional JSON report describing
the whole run.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from smali2java import __version__
from smali2java.core.models import TranslationRun

JAVA_EXTENSION: str = ".java"


class TranslationReportGenerator:
    """Generate source files and JSON reports from a translation run.

    Usage::

        generator = TranslationReportGenerator()
        generator.write_sources(run, "out/")
        generator.generate_json(run, "report.json")
    """

    def write_sources(
        self,
        run: TranslationRun,
        output_dir: str | Path,
    ) -> list[str]:
        """Write every successfully translated unit as a ``.java`` file.

        ``com/example/Foo.smali`` under the scanned root is written to
        ``<output_dir>/com/example/Foo.java``.

        Returns:
            Absolute paths of the written files, in run order.
        """
        base = Path(output_dir)
        written: list[str] = []
        for file in run.succeeded:
            if file.unit is None:
                continue
            target = (base / file.relative_path).with_suffix(JAVA_EXTENSION)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(file.unit.render() + "\n", encoding="utf-8")
            written.append(str(target.resolve()))
        return written

    def build_report(self, run: TranslationRun) -> dict[str, Any]:
        """Build the JSON-serialisable report structure."""
        return {
            "report_type": "smali2java_translation",
            "version": __version__,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "run": run.result.model_dump(mode="json"),
            "files": [
                {
                    "path": f.path,
                    "relative_path": f.relative_path,
                    "status": f.status.value,
                    "input_lines": f.input_lines,
                    "output_lines": f.output_lines,
                    "class_name": f.unit.class_name if f.unit is not None else None,
                    "super_name": f.unit.super_name if f.unit is not None else None,
                    "passthrough_lines": (
                        f.unit.passthrough_count if f.unit is not None else 0
                    ),
                    "error": f.error,
                }
                for f in run.files
            ],
        }

    def generate_json(
        self,
        run: TranslationRun,
        output_path: str | Path,
    ) -> str:
        """Write the JSON report to *output_path*.

        Returns:
            The absolute path of the generated report.
        """
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.build_report(run), f, indent=2, ensure_ascii=False, default=str)

        return str(path.resolve())
