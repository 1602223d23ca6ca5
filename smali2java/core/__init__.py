"""
Smali2Java Core Module
=======================

Data models shared by the translator.  The engine and file session
live in :mod:`smali2java.core.engine` and :mod:`smali2java.core.session`.
"""

from smali2java.core.models import (
    DescriptorError,
    FileTranslationResult,
    MalformedInstruction,
    Opcode,
    OutputUnit,
    RenderedLine,
    TokenizedInstruction,
    TranslationAborted,
    TranslationRun,
    TranslationStatus,
)

__all__ = [
    "DescriptorError",
    "FileTranslationResult",
    "MalformedInstruction",
    "Opcode",
    "OutputUnit",
    "RenderedLine",
    "TokenizedInstruction",
    "TranslationAborted",
    "TranslationRun",
    "TranslationStatus",
]
