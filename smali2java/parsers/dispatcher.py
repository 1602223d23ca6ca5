"""
Instruction Dispatcher
=======================

Routes each tokenized smali line to the matching signature parser and
appends the rendered Java-like line(s) to the file's
:class:`OutputUnit`.

Dispatch is a table lookup on the closed :class:`Opcode` vocabulary.
Every mnemonic outside that vocabulary takes the passthrough arm and is
kept verbatim behind a ``//`` comment marker, so no input line is ever
dropped from the output.

Rendered shapes::

    .class public La/b/C;          public class C {
    .super La/b/D;                 public class C extends D     (rewrites the line above)
    .field public static x:I       public static Integer x ;
    .method public foo()V          public  void foo (  ) {
    .end method                    }
    return-void                    return;
    return-object v1               return  v1;
    const-string v0, "hi"          final String v0 = "hi" ;
    invoke-static {p0}, La/B;->f()V  a.B . f ( p0 );
    <anything else>                // <tokens...>
"""

from __future__ import annotations

from typing import Callable

from smali2java.core.models import (
    Opcode,
    OutputUnit,
    RenderedLine,
    TokenizedInstruction,
)
from smali2java.parsers import signatures


COMMENT_MARKER: str = "//"
CLASS_KEYWORD: str = "class"
EXTENDS_KEYWORD: str = "extends"

_Handler = Callable[["InstructionDispatcher", OutputUnit, TokenizedInstruction], None]


class InstructionDispatcher:
    """Translate tokenized smali instructions into rendered lines.

    The dispatcher is stateless apart from its options; all per-file
    state lives in the :class:`OutputUnit` passed to :meth:`dispatch`.

    Usage::

        dispatcher = InstructionDispatcher()
        unit = OutputUnit()
        for number, line in enumerate(lines, 1):
            dispatcher.dispatch(unit, TokenizedInstruction.from_line(line, number))
        print(unit.render())

    Args:
        static_field_reads: Translate ``sget*`` instructions into
            assignments instead of passing them through.
    """

    def __init__(self, *, static_field_reads: bool = False) -> None:
        self._static_field_reads = static_field_reads

    @property
    def static_field_reads(self) -> bool:
        return self._static_field_reads

    def dispatch(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        """Apply one instruction to *unit*.

        Raises:
            MalformedInstruction: If a recognised instruction cannot be parsed.
        """
        if instr.is_empty:
            return

        opcode = instr.opcode
        if opcode.is_static_get and not self._static_field_reads:
            opcode = Opcode.PASSTHROUGH

        handler = _HANDLERS.get(opcode, InstructionDispatcher._passthrough)
        handler(self, unit, instr)

    def translate(
        self,
        lines: list[str],
        source_path: str = "",
    ) -> OutputUnit:
        """Translate an in-memory sequence of lines into a fresh unit."""
        unit = OutputUnit(source_path=source_path)
        for number, raw in enumerate(lines, start=1):
            self.dispatch(unit, TokenizedInstruction.from_line(raw, number))
        return unit

    # ------------------------------------------------------------------ #
    #  Declarations
    # ------------------------------------------------------------------ #

    def _class(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        if unit.class_name is not None:
            raise instr.malformed(f"class {unit.class_name!r} already declared")
        decl = signatures.parse_class(instr)
        unit.append(RenderedLine.of(decl.accessor, CLASS_KEYWORD, decl.name, "{"))
        unit.class_name = decl.name

    def _super(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        decl = signatures.parse_super(instr)
        if decl.is_root:
            return

        last = unit.last
        if (
            unit.class_name is None
            or last is None
            or len(last.tokens) < 3
            or last.tokens[1] != CLASS_KEYWORD
        ):
            raise instr.malformed("superclass must directly follow the class declaration")

        accessor, name = last.tokens[0], last.tokens[2]
        unit.replace_last(
            RenderedLine.of(accessor, CLASS_KEYWORD, name, EXTENDS_KEYWORD, decl.name)
        )
        unit.super_name = decl.name

    def _field(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        decl = signatures.parse_field(instr)
        if decl.initializer:
            line = RenderedLine.of(
                decl.accessor, decl.static, decl.type_name, decl.name,
                "=", decl.initializer, ";",
            )
        else:
            line = RenderedLine.of(
                decl.accessor, decl.static, decl.type_name, decl.name, ";",
            )
        unit.append(line)

    def _method(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        sig = signatures.parse_method(instr)
        name = sig.name
        if sig.is_constructor:
            if unit.class_name is None:
                raise instr.malformed("constructor declared before any class")
            name = unit.class_name
        # Parameter lists are not reconstructed, hence the empty slot
        unit.append(
            RenderedLine.of(sig.accessor, sig.static, sig.return_type, name, "(", "", ")", "{")
        )

    def _end(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        unit.append(RenderedLine.of("}"))

    # ------------------------------------------------------------------ #
    #  Method body instructions
    # ------------------------------------------------------------------ #

    def _return_void(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        unit.append(RenderedLine.of("return;"))

    def _return_object(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        variable = signatures.parse_return_object(instr)
        unit.append(RenderedLine.of("return ", f"{variable};"))

    def _const_string(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        const = signatures.parse_const_string(instr)
        unit.append(RenderedLine.of("final String", const.target, "=", const.literal, ";"))

    def _invoke_static(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        call = signatures.parse_invoke_static(instr)
        unit.append(RenderedLine.of(call.owner, ".", call.method, "(", call.arguments, ");"))

    def _static_get(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        read = signatures.parse_static_get(instr)
        unit.append(RenderedLine.of(read.target, "=", read.owner, ".", read.member, ";"))

    def _passthrough(self, unit: OutputUnit, instr: TokenizedInstruction) -> None:
        unit.append(RenderedLine.of(COMMENT_MARKER, *instr.tokens))
        unit.passthrough_count += 1


_HANDLERS: dict[Opcode, _Handler] = {
    Opcode.CLASS: InstructionDispatcher._class,
    Opcode.SUPER: InstructionDispatcher._super,
    Opcode.FIELD: InstructionDispatcher._field,
    Opcode.METHOD: InstructionDispatcher._method,
    Opcode.END: InstructionDispatcher._end,
    Opcode.RETURN_VOID: InstructionDispatcher._return_void,
    Opcode.RETURN_OBJECT: InstructionDispatcher._return_object,
    Opcode.CONST_STRING: InstructionDispatcher._const_string,
    Opcode.INVOKE_STATIC: InstructionDispatcher._invoke_static,
    Opcode.PASSTHROUGH: InstructionDispatcher._passthrough,
    **{op: InstructionDispatcher._static_get for op in Opcode if op.is_static_get},
}
