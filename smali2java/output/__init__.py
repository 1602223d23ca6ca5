"""
Smali2Java Output Module
=========================

Console display and file/report generation for translation runs.
"""

from smali2java.output.console import TranslationConsoleOutput
from smali2java.output.report import TranslationReportGenerator

__all__ = [
    "TranslationConsoleOutput",
    "TranslationReportGenerator",
]
