"""
Signature Parsers
==================

Pure functions that pull the structured pieces out of tokenized smali
declaration and instruction lines: class and superclass names, field and
method signatures, static call targets, and the operands of a few
body instructions.

Every parser takes a :class:`TokenizedInstruction` and either returns a
small frozen record or raises :class:`MalformedInstruction` naming the
mnemonic and the raw line.  None of them touch an output unit.

Operand layouts::

    .class  <modifiers...> <Descriptor>
    .super  <Descriptor>
    .field  <accessor> [static ...] <name>:<Descriptor> [= <value>]
    .method <accessor> [static ...] (constructor <init>(...)V | <name>(<args>)<Ret>)
    invoke-static {<regs>}, <Owner>-><name>(<args>)<Ret>
    sget*   <var>, <Owner>-><member>:<Descriptor>
    const-string <var>, <literal>
    return-object <var>[,]
"""

from __future__ import annotations

from dataclasses import dataclass

from smali2java.core.models import DescriptorError, TokenizedInstruction
from smali2java.parsers.descriptor import (
    NAMESPACE_DELIMITER,
    ROOT_CLASS,
    decode_descriptor,
    simple_class_name,
)


STATIC_MARKER: str = "static"
CONSTRUCTOR_MARKER: str = "constructor"
MEMBER_DELIMITER: str = "->"
FIELD_TYPE_DELIMITER: str = ":"
ARGS_OPEN: str = "("
ARGS_CLOSE: str = ")"
REGISTERS_OPEN: str = "{"
REGISTERS_CLOSE: str = "},"
OPERAND_SEPARATOR: str = ","
INITIALIZER_MARKER: str = "="


# ---------------------------------------------------------------------------
# Parsed records
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ClassDeclaration:
    accessor: str
    name: str


@dataclass(frozen=True, slots=True)
class SuperclassDeclaration:
    type_name: str
    name: str

    @property
    def is_root(self) -> bool:
        return self.type_name == ROOT_CLASS


@dataclass(frozen=True, slots=True)
class FieldDeclaration:
    accessor: str
    static: str
    type_name: str
    name: str
    initializer: str = ""


@dataclass(frozen=True, slots=True)
class MethodSignature:
    """A method header.

    For constructors *name* and *return_type* are empty; the caller
    substitutes the enclosing class name.
    """
    accessor: str
    static: str
    return_type: str
    name: str
    is_constructor: bool = False


@dataclass(frozen=True, slots=True)
class StaticInvocation:
    owner: str
    method: str
    arguments: str


@dataclass(frozen=True, slots=True)
class StaticFieldRead:
    target: str
    owner: str
    member: str
    type_name: str


@dataclass(frozen=True, slots=True)
class StringConstant:
    target: str
    literal: str


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _operand(instr: TokenizedInstruction, index: int, what: str) -> str:
    """Return operand *index* or raise if the line is too short."""
    operands = instr.operands
    if index >= len(operands):
        raise instr.malformed(f"missing {what}")
    return operands[index]


def _decode(instr: TokenizedInstruction, descriptor: str) -> str:
    try:
        return decode_descriptor(descriptor)
    except DescriptorError as exc:
        raise instr.malformed(str(exc)) from exc


def strip_separator(
    instr: TokenizedInstruction,
    token: str,
    *,
    required: bool = True,
) -> str:
    """Strip the trailing operand separator (``,``) from a register token.

    Args:
        instr: Instruction the token came from, for error reporting.
        token: Register token such as ``"v0,"``.
        required: Whether a missing separator is an error.

    Raises:
        MalformedInstruction: If the separator is required but absent,
            or nothing remains once it is removed.
    """
    if token.endswith(OPERAND_SEPARATOR):
        token = token[:-len(OPERAND_SEPARATOR)]
    elif required:
        raise instr.malformed(f"expected {OPERAND_SEPARATOR!r} after {token!r}")
    if not token:
        raise instr.malformed("empty register name")
    return token


def _split_modifiers(
    instr: TokenizedInstruction,
    signature_index: int,
) -> tuple[str, str]:
    """Split the tokens before the signature into (accessor, static slot).

    The first modifier is the accessor; the rest (normally just
    ``static``) fill the static slot.
    """
    modifiers = instr.operands[:signature_index]
    accessor = modifiers[0] if modifiers else ""
    return accessor, " ".join(modifiers[1:])


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

def parse_class(instr: TokenizedInstruction) -> ClassDeclaration:
    """Parse ``.class <modifiers...> <Descriptor>``."""
    if not instr.operands:
        raise instr.malformed("missing class descriptor")
    descriptor = instr.operands[-1]
    try:
        name = simple_class_name(descriptor)
    except DescriptorError as exc:
        raise instr.malformed(str(exc)) from exc
    return ClassDeclaration(accessor=" ".join(instr.operands[:-1]), name=name)


def parse_super(instr: TokenizedInstruction) -> SuperclassDeclaration:
    """Parse ``.super <Descriptor>`` into its qualified and simple names."""
    type_name = _decode(instr, _operand(instr, 0, "superclass descriptor"))
    return SuperclassDeclaration(
        type_name=type_name,
        name=type_name.rsplit(NAMESPACE_DELIMITER, 1)[-1],
    )


def parse_field(instr: TokenizedInstruction) -> FieldDeclaration:
    """Parse a ``.field`` declaration.

    The name/type token is the first operand containing ``:``.  An
    ``= <value>`` initialiser after it is kept verbatim.
    """
    operands = instr.operands
    index = next(
        (i for i, tok in enumerate(operands) if FIELD_TYPE_DELIMITER in tok),
        None,
    )
    if index is None:
        raise instr.malformed(f"missing {FIELD_TYPE_DELIMITER!r} in field signature")

    name, _, descriptor = operands[index].partition(FIELD_TYPE_DELIMITER)
    if not name or not descriptor:
        raise instr.malformed(f"bad field signature {operands[index]!r}")

    initializer = ""
    rest = operands[index + 1:]
    if rest:
        if rest[0] != INITIALIZER_MARKER or len(rest) < 2:
            raise instr.malformed(f"unexpected tokens after field signature: {' '.join(rest)!r}")
        initializer = " ".join(rest[1:])

    accessor, static = _split_modifiers(instr, index)
    return FieldDeclaration(
        accessor=accessor,
        static=static,
        type_name=_decode(instr, descriptor),
        name=name,
        initializer=initializer,
    )


def parse_method(instr: TokenizedInstruction) -> MethodSignature:
    """Parse a ``.method`` declaration.

    Parameter descriptors are discarded; only the name and return type
    are recovered.
    """
    operands = instr.operands
    index = next(
        (
            i for i, tok in enumerate(operands)
            if tok == CONSTRUCTOR_MARKER or ARGS_OPEN in tok
        ),
        None,
    )
    if index is None:
        raise instr.malformed("missing method signature")

    accessor, static = _split_modifiers(instr, index)
    signature = operands[index]
    if signature == CONSTRUCTOR_MARKER:
        return MethodSignature(
            accessor=accessor,
            static=static,
            return_type="",
            name="",
            is_constructor=True,
        )

    head, close, return_descriptor = signature.partition(ARGS_CLOSE)
    name, open_, _params = head.partition(ARGS_OPEN)
    if not close or not open_ or not name or not return_descriptor:
        raise instr.malformed(f"bad method signature {signature!r}")

    return MethodSignature(
        accessor=accessor,
        static=static,
        return_type=_decode(instr, return_descriptor),
        name=name,
    )


# ---------------------------------------------------------------------------
# Body instructions
# ---------------------------------------------------------------------------

def parse_invoke_static(instr: TokenizedInstruction) -> StaticInvocation:
    """Parse ``invoke-static {<regs>}, <Owner>-><name>(...)<Ret>``.

    The register list may span several tokens (``{v0, v1},``); it is
    rejoined with single spaces and passed through as one argument text.
    """
    operands = instr.operands
    close = next(
        (i for i, tok in enumerate(operands) if tok.endswith(REGISTERS_CLOSE)),
        None,
    )
    if close is None:
        raise instr.malformed(f"register list not closed with {REGISTERS_CLOSE!r}")

    registers = " ".join(operands[:close + 1])
    if not registers.startswith(REGISTERS_OPEN):
        raise instr.malformed(f"register list not opened with {REGISTERS_OPEN!r}")
    arguments = registers[len(REGISTERS_OPEN):-len(REGISTERS_CLOSE)]

    target = _operand(instr, close + 1, "call target")
    owner_descriptor, arrow, member = target.partition(MEMBER_DELIMITER)
    method, open_, _rest = member.partition(ARGS_OPEN)
    if not arrow or not open_ or not method:
        raise instr.malformed(f"bad call target {target!r}")

    return StaticInvocation(
        owner=_decode(instr, owner_descriptor),
        method=method,
        arguments=arguments,
    )


def parse_static_get(instr: TokenizedInstruction) -> StaticFieldRead:
    """Parse ``sget* <var>, <Owner>-><member>:<Descriptor>``."""
    target = strip_separator(instr, _operand(instr, 0, "destination register"))
    reference = _operand(instr, 1, "field reference")

    owner_descriptor, arrow, member = reference.partition(MEMBER_DELIMITER)
    name, colon, descriptor = member.partition(FIELD_TYPE_DELIMITER)
    if not arrow or not colon or not name:
        raise instr.malformed(f"bad field reference {reference!r}")

    return StaticFieldRead(
        target=target,
        owner=_decode(instr, owner_descriptor),
        member=name,
        type_name=_decode(instr, descriptor),
    )


def parse_const_string(instr: TokenizedInstruction) -> StringConstant:
    """Parse ``const-string <var>, <literal>``.

    The literal is taken from the raw line so that runs of whitespace
    inside the quotes survive.
    """
    target = strip_separator(instr, _operand(instr, 0, "destination register"))
    parts = instr.raw.split(None, 2)
    if len(parts) < 3 or not parts[2].strip():
        raise instr.malformed("missing string literal")
    return StringConstant(target=target, literal=parts[2].strip())


def parse_return_object(instr: TokenizedInstruction) -> str:
    """Parse ``return-object <var>``; a trailing ``,`` is dropped if present."""
    return strip_separator(
        instr,
        _operand(instr, 0, "returned register"),
        required=False,
    )
