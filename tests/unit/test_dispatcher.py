"""
Unit tests for the instruction dispatcher.
"""

import pytest

from smali2java.core.models import (
    MalformedInstruction,
    OutputUnit,
    TokenizedInstruction,
)
from smali2java.parsers.dispatcher import InstructionDispatcher


def _feed(dispatcher, unit, *lines):
    for number, line in enumerate(lines, start=1):
        dispatcher.dispatch(unit, TokenizedInstruction.from_line(line, number))
    return [line.text for line in unit.lines]


@pytest.fixture
def unit():
    return OutputUnit()


def test_empty_line_is_noop(dispatcher, unit):
    """Test that blank and whitespace-only lines emit nothing."""
    assert _feed(dispatcher, unit, "", "   ", "\t") == []


def test_class_declaration(dispatcher, unit):
    """Test the class declaration line and the recorded class name."""
    assert _feed(dispatcher, unit, ".class public La/b/C;") == ["public class C {"]
    assert unit.class_name == "C"


def test_second_class_declaration_rejected(dispatcher, unit):
    """Test that the class name is set only once."""
    _feed(dispatcher, unit, ".class public La/b/C;")
    with pytest.raises(MalformedInstruction):
        _feed(dispatcher, unit, ".class public La/b/D;")


def test_super_object_leaves_declaration(dispatcher, unit):
    """Test that the root class does not add an extends clause."""
    lines = _feed(dispatcher, unit, ".class public La/b/C;", ".super Ljava/lang/Object;")
    assert lines == ["public class C {"]
    assert unit.super_name is None


def test_super_rewrites_declaration(dispatcher, unit):
    """Test that a real superclass rewrites the previous line in place."""
    lines = _feed(dispatcher, unit, ".class public La/b/C;", ".super La/b/D;")
    assert lines == ["public class C extends D"]
    assert lines[-1].endswith("extends D")
    assert unit.super_name == "D"


def test_super_object_after_other_lines(dispatcher, unit):
    """Test that the root superclass is a no-op wherever it appears."""
    lines = _feed(
        dispatcher, unit, ".class public La/b/C;", "# comment", ".super Ljava/lang/Object;"
    )
    assert lines == ["public class C {", "// # comment"]


def test_super_object_without_class(dispatcher, unit):
    """Test that the root superclass needs no class declaration."""
    assert _feed(dispatcher, unit, ".super Ljava/lang/Object;") == []


def test_super_named_object_outside_java_lang(dispatcher, unit):
    """Test that a class merely named Object is a real superclass."""
    lines = _feed(dispatcher, unit, ".class public La/b/C;", ".super Lcom/x/Object;")
    assert lines == ["public class C extends Object"]
    assert unit.super_name == "Object"


def test_super_before_class_rejected(dispatcher, unit):
    """Test that .super needs a preceding class declaration."""
    with pytest.raises(MalformedInstruction) as excinfo:
        _feed(dispatcher, unit, ".super La/b/D;")
    assert excinfo.value.mnemonic == ".super"


def test_super_not_after_class_rejected(dispatcher, unit):
    """Test that .super must directly follow the class declaration."""
    with pytest.raises(MalformedInstruction):
        _feed(dispatcher, unit, ".class public La/b/C;", ".source \"C.java\"", ".super La/b/D;")


def test_field_declarations(dispatcher, unit):
    """Test static and instance fields."""
    lines = _feed(
        dispatcher,
        unit,
        ".field public static count:I",
        ".field private name:Ljava/lang/String;",
        '.field private static final TAG:Ljava/lang/String; = "Hello"',
    )
    assert lines == [
        "public static Integer count ;",
        "private  java.lang.String name ;",
        'private static final java.lang.String TAG = "Hello" ;',
    ]


def test_method_declaration(dispatcher, unit):
    """Test a regular method header."""
    lines = _feed(dispatcher, unit, ".method public static main([Ljava/lang/String;)V")
    assert lines == ["public static void main (  ) {"]


def test_constructor_block(dispatcher, unit):
    """Test the constructor, return and closing brace sequence."""
    unit.class_name = "C"
    lines = _feed(
        dispatcher,
        unit,
        ".method public constructor <init>()V",
        "return-void",
        ".end method",
    )
    assert lines == ["public   C (  ) {", "return;", "}"]


def test_constructor_without_class_rejected(dispatcher, unit):
    """Test that a constructor needs the class name."""
    with pytest.raises(MalformedInstruction):
        _feed(dispatcher, unit, ".method public constructor <init>()V")


def test_const_string(dispatcher, unit):
    """Test the string constant declaration."""
    assert _feed(dispatcher, unit, 'const-string v0, "hello"') == ['final String v0 = "hello" ;']


def test_return_object(dispatcher, unit):
    """Test that the trailing comma is stripped from the variable."""
    assert _feed(dispatcher, unit, "return-object v1,") == ["return  v1;"]


def test_invoke_static(dispatcher, unit):
    """Test the static call statement."""
    lines = _feed(
        dispatcher,
        unit,
        "invoke-static {p0}, Lcom/checker/HttpRequest;->post"
        "(Ljava/lang/CharSequence;)Lcom/checker/HttpRequest;",
    )
    assert lines == ["com.checker.HttpRequest . post ( p0 );"]


def test_passthrough_preserves_tokens(dispatcher, unit):
    """Test that unknown mnemonics are kept verbatim as comments."""
    assert _feed(dispatcher, unit, "foo bar baz") == ["// foo bar baz"]
    assert unit.passthrough_count == 1


def test_passthrough_collapses_whitespace(dispatcher, unit):
    """Test that passthrough keeps tokens, not the original spacing."""
    assert _feed(dispatcher, unit, "    .registers   2") == ["// .registers 2"]


def test_static_get_passthrough_by_default(dispatcher, unit):
    """Test that sget* is not translated unless enabled."""
    lines = _feed(dispatcher, unit, "sget-object v0, La/B;->X:I")
    assert lines == ["// sget-object v0, La/B;->X:I"]


def test_static_get_enabled(unit):
    """Test the optional static field read translation."""
    dispatcher = InstructionDispatcher(static_field_reads=True)
    lines = _feed(dispatcher, unit, "sget-object v0, Landroid/os/Build;->MODEL:Ljava/lang/String;")
    assert lines == ["v0 = android.os.Build . MODEL ;"]
    assert unit.passthrough_count == 0


def test_translate_is_idempotent(dispatcher):
    """Test that two independent translations are identical."""
    source = [
        ".class public La/b/C;",
        ".super La/b/D;",
        ".method public constructor <init>()V",
        "invoke-direct {p0}, La/b/D;-><init>()V",
        "return-void",
        ".end method",
    ]
    first = dispatcher.translate(source)
    second = dispatcher.translate(source)
    assert first.render() == second.render()
    assert first is not second
    assert first.render().splitlines() == [
        "public class C extends D",
        "public   C (  ) {",
        "// invoke-direct {p0}, La/b/D;-><init>()V",
        "return;",
        "}",
    ]


def test_malformed_line_carries_number(dispatcher, unit):
    """Test that the line number reaches the exception."""
    with pytest.raises(MalformedInstruction) as excinfo:
        _feed(dispatcher, unit, ".class public La/b/C;", ".field public broken")
    assert excinfo.value.line_number == 2
