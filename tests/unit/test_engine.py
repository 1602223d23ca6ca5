"""
Unit tests for the file session and the translation engine.
"""

import asyncio
from pathlib import Path

import pytest

from smali2java.core.engine import TranslationEngine
from smali2java.core.models import TranslationAborted, TranslationStatus
from smali2java.core.session import FileTranslationSession
from shared.models import Severity


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

def test_session_translates_file(smali_tree, dispatcher, quiet_logger):
    """Test a complete file translation."""
    path = smali_tree / "com" / "example" / "Hello.smali"
    result = FileTranslationSession(
        path, dispatcher, root=smali_tree, logger=quiet_logger
    ).run()

    assert result.status == TranslationStatus.OK
    assert result.relative_path == "com/example/Hello.smali"
    assert result.unit is not None
    lines = result.unit.render().splitlines()
    assert lines[0] == "public class Hello extends Activity"
    assert 'private static final java.lang.String TAG = "Hello" ;' in lines
    assert "public  Integer count ;" in lines
    assert "public   Hello (  ) {" in lines
    assert 'final String v0 = "hello world" ;' in lines
    assert "return  v0;" in lines
    assert "public static java.lang.String greet (  ) {" in lines
    assert result.unit.class_name == "Hello"
    assert result.unit.super_name == "Activity"


def test_session_malformed(smali_tree, dispatcher, quiet_logger):
    """Test that a parse failure is reported, not raised."""
    path = smali_tree / "a" / "b" / "Broken.smali"
    result = FileTranslationSession(path, dispatcher, logger=quiet_logger).run()

    assert result.status == TranslationStatus.MALFORMED
    assert result.unit is None
    assert result.input_lines == 3
    assert ".method" in result.error


def test_session_missing_file(tmp_path, dispatcher, quiet_logger):
    """Test that an unreadable file is reported as an I/O error."""
    result = FileTranslationSession(
        tmp_path / "Nope.smali", dispatcher, logger=quiet_logger
    ).run()
    assert result.status == TranslationStatus.IO_ERROR
    assert "FileNotFoundError" in result.error


def test_session_undecodable_file(tmp_path, dispatcher, quiet_logger):
    """Test that invalid bytes are reported as an I/O error."""
    path = tmp_path / "Bad.smali"
    path.write_bytes(b".class public La/Bad;\n\xff\xfe\xfa\n")
    result = FileTranslationSession(path, dispatcher, logger=quiet_logger).run()
    assert result.status == TranslationStatus.IO_ERROR


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def test_discover_filters_and_sorts(smali_tree, config, quiet_logger):
    """Test recursive discovery by extension."""
    engine = TranslationEngine(config=config, logger=quiet_logger)
    found = [p.relative_to(smali_tree).as_posix() for p in engine.discover(smali_tree)]
    assert found == [
        "a/b/Broken.smali",
        "a/b/Plain.smali",
        "com/example/Hello.smali",
    ]


def test_discover_single_file(smali_tree, config, quiet_logger):
    """Test that a file root yields itself."""
    engine = TranslationEngine(config=config, logger=quiet_logger)
    path = smali_tree / "a" / "b" / "Plain.smali"
    assert engine.discover(path) == [path]
    assert engine.discover(smali_tree / "a" / "b" / "notes.txt") == []


def test_discover_extension_without_dot(smali_tree, config, quiet_logger):
    """Test that a bare extension is matched like a dotted one."""
    config.translator.extension = "smali"
    engine = TranslationEngine(config=config, logger=quiet_logger)
    assert engine.extension == ".smali"
    assert len(engine.discover(smali_tree)) == 3
    assert engine.discover(smali_tree / "a" / "b" / "Plain.smali") == [
        smali_tree / "a" / "b" / "Plain.smali"
    ]


def test_discover_missing_root(tmp_path, config, quiet_logger):
    """Test that a missing root is an error."""
    engine = TranslationEngine(config=config, logger=quiet_logger)
    with pytest.raises(FileNotFoundError):
        engine.discover(tmp_path / "missing")


def test_translate_isolates_failures(smali_tree, config, quiet_logger):
    """Test that one bad file does not stop the others."""
    engine = TranslationEngine(config=config, logger=quiet_logger)
    run = engine.translate_sync(smali_tree)

    assert [f.relative_path for f in run.files] == [
        "a/b/Broken.smali",
        "a/b/Plain.smali",
        "com/example/Hello.smali",
    ]
    assert len(run.succeeded) == 2
    assert len(run.failed) == 1
    assert run.result.error_count == 1
    diag = run.result.diagnostics[0]
    assert diag.severity == Severity.ERROR
    assert diag.path == "a/b/Broken.smali"
    assert run.result.metadata["files"] == 3
    assert run.result.metadata["failed"] == 1
    assert run.result.end_time is not None


def test_translate_async(smali_tree, config, quiet_logger):
    """Test the coroutine entry point."""
    engine = TranslationEngine(config=config, logger=quiet_logger)
    run = asyncio.run(engine.translate(smali_tree / "a"))
    plain = next(f for f in run.files if f.relative_path == "b/Plain.smali")
    assert plain.unit.render().splitlines() == [
        "public class Plain {",
        "public static void run (  ) {",
        "a.b.Util . init (  );",
        "return;",
        "}",
    ]


def test_translate_uses_configured_root(smali_tree, config, quiet_logger):
    """Test that the configured root is the default."""
    config.translator.root = str(smali_tree / "com")
    engine = TranslationEngine(config=config, logger=quiet_logger)
    run = engine.translate_sync()
    assert [f.relative_path for f in run.files] == ["example/Hello.smali"]


def test_translate_is_repeatable(smali_tree, config, quiet_logger):
    """Test that two runs render byte-identical output."""
    engine = TranslationEngine(config=config, logger=quiet_logger)
    first = engine.translate_sync(smali_tree)
    second = engine.translate_sync(smali_tree)
    assert [f.unit.render() for f in first.succeeded] == [
        f.unit.render() for f in second.succeeded
    ]


def test_fail_fast(smali_tree, config, quiet_logger):
    """Test that fail-fast mode aborts when any file failed."""
    config.translator.fail_fast = True
    engine = TranslationEngine(config=config, logger=quiet_logger)
    with pytest.raises(TranslationAborted, match="Broken.smali"):
        engine.translate_sync(smali_tree)


def test_static_field_reads_option(tmp_path: Path, config, quiet_logger):
    """Test that the configuration reaches the dispatcher."""
    (tmp_path / "S.smali").write_text(
        "sget-object v0, La/B;->X:Ljava/lang/String;\n", encoding="utf-8"
    )
    config.translator.static_field_reads = True
    engine = TranslationEngine(config=config, logger=quiet_logger)
    run = engine.translate_sync(tmp_path)
    assert run.files[0].unit.render() == "v0 = a.B . X ;"
