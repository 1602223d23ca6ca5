"""
Smali2Java Shared Module
========================

Configuration, logging, console presentation, and result models shared
by the toolkit's components.
"""

from shared.config import Smali2JavaConfig

__all__ = ["Smali2JavaConfig"]
