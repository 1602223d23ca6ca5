"""
Smali2Java Parsers
===================

Descriptor decoding, signature parsing, and opcode dispatch for
tokenized smali lines.
"""

from smali2java.parsers.descriptor import decode_descriptor, simple_class_name
from smali2java.parsers.dispatcher import InstructionDispatcher

__all__ = [
    "InstructionDispatcher",
    "decode_descriptor",
    "simple_class_name",
]
