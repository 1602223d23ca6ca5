"""
Unit tests for configuration loading.
"""

from pathlib import Path

import pytest

from shared.config import Smali2JavaConfig


def test_defaults():
    """Test the built-in defaults."""
    config = Smali2JavaConfig()
    assert config.translator.extension == ".smali"
    assert config.translator.root == "./"
    assert config.translator.static_field_reads is False
    assert config.global_settings.max_workers == 4


def test_load_from_toml(tmp_path: Path):
    """Test that sections are read and unknown keys ignored."""
    path = tmp_path / "config.toml"
    path.write_text(
        "[global]\n"
        'log_level = "DEBUG"\n'
        "max_workers = 8\n"
        "unknown_key = 1\n"
        "\n"
        "[translator]\n"
        'extension = ".sm"\n'
        "static_field_reads = true\n",
        encoding="utf-8",
    )
    config = Smali2JavaConfig.load(path)
    assert config.global_settings.log_level == "DEBUG"
    assert config.global_settings.max_workers == 8
    assert config.translator.extension == ".sm"
    assert config.translator.static_field_reads is True
    assert config.translator.encoding == "utf-8"


def test_load_missing_explicit_path(tmp_path: Path):
    """Test that an explicitly requested file must exist."""
    with pytest.raises(FileNotFoundError):
        Smali2JavaConfig.load(tmp_path / "missing.toml")


def test_with_overrides_skips_none():
    """Test that None values do not mask existing settings."""
    config = Smali2JavaConfig()
    config.translator.extension = ".sm"
    updated = config.with_overrides(
        translator={"extension": None, "root": "src/", "fail_fast": True},
        global_settings={"max_workers": None},
    )
    assert updated.translator.extension == ".sm"
    assert updated.translator.root == "src/"
    assert updated.translator.fail_fast is True
    assert updated.global_settings.max_workers == 4
    assert config.translator.root == "./"

