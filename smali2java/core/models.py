"""
Translation Data Models
========================

Pydantic-based data models for the smali translator: the closed opcode
vocabulary, tokenized input instructions, the per-file output unit
accumulator, and per-file / per-run results.

Also defines the exceptions raised while translating.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.models import RunResult


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class DescriptorError(ValueError):
    """A type descriptor does not have the expected shape."""


class MalformedInstruction(ValueError):
    """An instruction line could not be parsed.

    Attributes:
        mnemonic: First token of the offending line.
        raw: The offending line as read.
        line_number: 1-based line number, or 0 when unknown.
        reason: What was wrong with the line.
    """

    def __init__(
        self,
        mnemonic: str,
        raw: str,
        reason: str,
        line_number: int = 0,
    ) -> None:
        self.mnemonic = mnemonic
        self.raw = raw
        self.reason = reason
        self.line_number = line_number
        where = f"line {line_number}: " if line_number else ""
        super().__init__(
            f"{where}malformed {mnemonic!r} instruction ({reason}): {raw.strip()!r}"
        )


class TranslationAborted(RuntimeError):
    """Raised in fail-fast mode when at least one file failed."""


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Opcode(str, enum.Enum):
    """Instruction vocabulary recognised by the dispatcher.

    ``PASSTHROUGH`` is the fallback for every mnemonic not listed here.
    """
    CLASS = ".class"
    SUPER = ".super"
    FIELD = ".field"
    METHOD = ".method"
    END = ".end"
    RETURN_VOID = "return-void"
    RETURN_OBJECT = "return-object"
    CONST_STRING = "const-string"
    INVOKE_STATIC = "invoke-static"
    SGET = "sget"
    SGET_WIDE = "sget-wide"
    SGET_OBJECT = "sget-object"
    SGET_BOOLEAN = "sget-boolean"
    SGET_BYTE = "sget-byte"
    SGET_CHAR = "sget-char"
    SGET_SHORT = "sget-short"
    PASSTHROUGH = "//"

    @classmethod
    def lookup(cls, mnemonic: str) -> Opcode:
        """Return the opcode for *mnemonic*, or ``PASSTHROUGH``."""
        try:
            return cls(mnemonic)
        except ValueError:
            return cls.PASSTHROUGH

    @property
    def is_static_get(self) -> bool:
        return self in _STATIC_GET_OPCODES


_STATIC_GET_OPCODES: frozenset[Opcode] = frozenset({
    Opcode.SGET,
    Opcode.SGET_WIDE,
    Opcode.SGET_OBJECT,
    Opcode.SGET_BOOLEAN,
    Opcode.SGET_BYTE,
    Opcode.SGET_CHAR,
    Opcode.SGET_SHORT,
})


class TranslationStatus(str, enum.Enum):
    """Outcome of translating one file."""
    OK = "ok"
    MALFORMED = "malformed"
    IO_ERROR = "io_error"


# ---------------------------------------------------------------------------
# Input / output line models
# ---------------------------------------------------------------------------

class TokenizedInstruction(BaseModel):
    """One input line split on whitespace.

    Attributes:
        raw: The line as read, without the trailing newline.
        tokens: Whitespace-separated tokens.
        line_number: 1-based position in the source file.
    """
    model_config = ConfigDict(frozen=True)

    raw: str = ""
    tokens: tuple[str, ...] = ()
    line_number: int = 0

    @classmethod
    def from_line(cls, raw: str, line_number: int = 0) -> TokenizedInstruction:
        raw = raw.rstrip("\r\n")
        return cls(raw=raw, tokens=tuple(raw.split()), line_number=line_number)

    @property
    def is_empty(self) -> bool:
        return not self.tokens

    @property
    def mnemonic(self) -> str:
        return self.tokens[0] if self.tokens else ""

    @property
    def operands(self) -> tuple[str, ...]:
        return self.tokens[1:]

    @property
    def opcode(self) -> Opcode:
        return Opcode.lookup(self.mnemonic)

    def malformed(self, reason: str) -> MalformedInstruction:
        """Build a :class:`MalformedInstruction` describing this line."""
        return MalformedInstruction(
            self.mnemonic, self.raw, reason, line_number=self.line_number
        )


class RenderedLine(BaseModel):
    """One line of translated output kept as an ordered token sequence.

    Tokens are joined with single spaces; empty tokens are kept so that
    optional slots (such as a missing ``static`` marker) still occupy a
    position in the output.
    """
    model_config = ConfigDict(frozen=True)

    tokens: tuple[str, ...] = ()

    @classmethod
    def of(cls, *tokens: str) -> RenderedLine:
        return cls(tokens=tokens)

    @property
    def text(self) -> str:
        return " ".join(self.tokens)

    def __str__(self) -> str:
        return self.text


# ---------------------------------------------------------------------------
# Output unit
# ---------------------------------------------------------------------------

class OutputUnit(BaseModel):
    """Per-file accumulator of rendered lines and declaration state.

    Lines are append-only.  The single exception is
    :meth:`replace_last`, used when a superclass declaration rewrites
    the class declaration that precedes it.

    Attributes:
        source_path: Path of the input file, for reporting.
        lines: Rendered lines in emission order.
        class_name: Simple name of the declared class, set by ``.class``.
        super_name: Simple name of the declared superclass, unless it is
            ``java.lang.Object``.
        passthrough_count: Number of lines emitted as passthrough comments.
    """
    source_path: str = ""
    lines: list[RenderedLine] = Field(default_factory=list)
    class_name: Optional[str] = None
    super_name: Optional[str] = None
    passthrough_count: int = 0

    def append(self, line: RenderedLine) -> None:
        self.lines.append(line)

    def replace_last(self, line: RenderedLine) -> RenderedLine:
        """Replace the most recently appended line and return the old one.

        Raises:
            IndexError: If no line has been appended yet.
        """
        if not self.lines:
            raise IndexError("replace_last() on an empty output unit")
        previous = self.lines[-1]
        self.lines[-1] = line
        return previous

    @property
    def last(self) -> RenderedLine | None:
        return self.lines[-1] if self.lines else None

    def render(self) -> str:
        """Join every line's tokens with spaces and lines with newlines."""
        return "\n".join(line.text for line in self.lines)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class FileTranslationResult(BaseModel):
    """Isolated outcome of one file translation session.

    Attributes:
        path: Absolute path of the input file.
        relative_path: Path relative to the scanned root.
        status: Translation outcome.
        unit: The completed output unit (``None`` on failure).
        error: Error message when the translation failed.
        input_lines: Number of input lines read before finishing or failing.
    """
    path: str = ""
    relative_path: str = ""
    status: TranslationStatus = TranslationStatus.OK
    unit: Optional[OutputUnit] = None
    error: str = ""
    input_lines: int = 0

    @property
    def ok(self) -> bool:
        return self.status == TranslationStatus.OK

    @property
    def output_lines(self) -> int:
        return len(self.unit.lines) if self.unit is not None else 0


class TranslationRun(BaseModel):
    """Everything produced by translating one directory tree.

    Attributes:
        result: Run metadata and diagnostics.
        files: Per-file results in discovery order.
    """
    result: RunResult
    files: list[FileTranslationResult] = Field(default_factory=list)

    @property
    def succeeded(self) -> list[FileTranslationResult]:
        return [f for f in self.files if f.ok]

    @property
    def failed(self) -> list[FileTranslationResult]:
        return [f for f in self.files if not f.ok]
