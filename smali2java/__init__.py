"""
smali2java -- smali to Java Source Rendering
=============================================

Translates disassembled Dalvik bytecode (smali) into a readable
Java-like rendering: class and field declarations, method signatures,
and a best-effort line-by-line reconstruction of method bodies.

Capabilities:
    - Dalvik type descriptor decoding (primitives, objects, arrays)
    - Class, superclass, field, and method signature parsing
    - Translation of return, const-string, and invoke-static instructions
    - Verbatim passthrough of every other instruction as a comment
    - Concurrent translation of whole directory trees
    - ``.java`` output trees and JSON run reports

References:
    - Google. (2024). Dalvik bytecode format.
      https://source.android.com/docs/core/runtime/dalvik-bytecode
    - JesusFreke. smali/baksmali assembler syntax.
"""

__version__ = "1.0.0"
