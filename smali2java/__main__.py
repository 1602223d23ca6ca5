"""
smali2java Module Entry Point
==============================

Allows running the CLI via: python -m smali2java
"""

from smali2java.cli import main

if __name__ == "__main__":
    main()
