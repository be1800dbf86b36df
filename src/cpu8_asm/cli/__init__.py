"""
cpu8-asm Command-Line Interface
===============================

- **cpuasm**: 8-bit CPU assembler

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["cpuasm"]
