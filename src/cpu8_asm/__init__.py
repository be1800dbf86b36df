"""
cpu8-asm - Assembler for a Homebrew 8-bit CPU
=============================================

This package assembles programs for a small 8-bit CPU built in the Logisim
digital-logic simulator. The output is a "v2.0 raw" memory image that can
be loaded straight into the simulated program memory.

Main Components
---------------
- **assembler**: Scanner, addressing-mode classifier, encoder, label
  resolver and image writer
- **cli**: The `cpuasm` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from cpu8_asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("count.asm")
    >>> asm.write_image("count.out")

Or use the command-line tool:
    $ cpuasm count.asm count.out
"""

__version__ = "0.2.0"

# =============================================================================
# Public API Exports
# =============================================================================

from cpu8_asm.assembler import Assembler, assemble, assemble_file
from cpu8_asm.config import AssemblerConfig, DEFAULT_CONFIG
from cpu8_asm.errors import (
    Cpu8Error,
    AssemblerError,
    UnknownMnemonicError,
    InvalidOperandError,
    AddressFormatError,
    AddressRangeError,
    LabelError,
    LabelTooLongError,
    InvalidLabelError,
    DuplicateLabelError,
    LabelTableOverflowError,
    JumpTableOverflowError,
    ProgramSizeExceededError,
    UndefinedLabelError,
    MissingFileError,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Configuration
    "AssemblerConfig",
    "DEFAULT_CONFIG",
    # Exception hierarchy
    "Cpu8Error",
    "AssemblerError",
    "UnknownMnemonicError",
    "InvalidOperandError",
    "AddressFormatError",
    "AddressRangeError",
    "LabelError",
    "LabelTooLongError",
    "InvalidLabelError",
    "DuplicateLabelError",
    "LabelTableOverflowError",
    "JumpTableOverflowError",
    "ProgramSizeExceededError",
    "UndefinedLabelError",
    "MissingFileError",
    "SourceLocation",
]
