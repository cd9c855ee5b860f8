"""
Hack Assembler Command-Line Interface
=====================================

This package provides the command-line tools for the Hack assembler:

- **hackasm**: Hack assembler (.asm -> .hack)

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["hackasm"]
