"""
Smali2Java Configuration Management
====================================

Centralized configuration for the smali2java toolkit using Python
dataclasses and TOML-based persistence.

Configuration is split into a ``[global]`` section (logging, worker
pool, debug switches) and a ``[translator]`` section (input discovery
and translation options).  Command-line flags override file values.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "config.toml"


# ========================== Tool-Specific Configs ==========================


@dataclass(frozen=False, slots=True)
class TranslatorConfig:
    """Configuration for the smali translator.

    Controls which files are discovered under the root directory, how
    they are decoded, where rendered units are written, and which
    optional instruction forms are enabled.
    """

    extension: str = ".smali"
    root: str = "./"
    encoding: str = "utf-8"
    output_dir: str = ""
    static_field_reads: bool = False
    fail_fast: bool = False


# =========================== Global Settings ===============================


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings shared across the toolkit.

    Controls logging verbosity, log destinations, and the size of the
    worker pool used for concurrent file translation.
    """

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    max_workers: int = 4
    # Forces DEBUG logging, like --verbose
    debug: bool = False


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class Smali2JavaConfig:
    """Master configuration aggregating global and translator settings.

    Usage:
        >>> config = Smali2JavaConfig.load()                 # from default path
        >>> config = Smali2JavaConfig.load("custom.toml")    # from custom path
        >>> print(config.translator.extension)
        '.smali'
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    translator: TranslatorConfig = field(default_factory=TranslatorConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> Smali2JavaConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``config.toml`` in the
        project root.  Missing keys gracefully fall back to dataclass
        defaults -- no ``KeyError`` is raised.

        Args:
            path: Filesystem path to a TOML configuration file.
                  Defaults to ``<project_root>/config.toml``.

        Returns:
            A fully-populated :class:`Smali2JavaConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            translator=cls._build_section(TranslatorConfig, raw.get("translator", {})),
        )

    # ------------------------------------------------------------------ #
    #  Overrides
    # ------------------------------------------------------------------ #

    def with_overrides(
        self,
        *,
        translator: dict[str, Any] | None = None,
        global_settings: dict[str, Any] | None = None,
    ) -> Smali2JavaConfig:
        """Return a copy with the given non-``None`` values replaced.

        Used by the CLI so that flags left at their default do not mask
        values coming from the configuration file.
        """
        tr = {k: v for k, v in (translator or {}).items() if v is not None}
        gl = {k: v for k, v in (global_settings or {}).items() if v is not None}
        return Smali2JavaConfig(
            global_settings=replace(self.global_settings, **gl),
            translator=replace(self.translator, **tr),
        )

    # ------------------------------------------------------------------ #
    #  Internal helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are silently ignored so that
        forward-compatible config files do not break older code.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


