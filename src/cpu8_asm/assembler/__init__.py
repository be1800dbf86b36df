"""
8-bit CPU Assembler
===================

This package translates assembly source for the 8-bit CPU into a memory
image that Logisim loads into its RAM/ROM components.

Main Components
---------------
- **Assembler**: Main class that orchestrates the assembly process
- **Lexer**: Splits source lines into comment-free tokens
- **classify_operand**: Determines the addressing mode of an operand
- **CodeGenerator**: Encodes instructions and resolves labels (two-pass)
- **format_image / write_image**: Memory image serialization

Assembly Process
----------------
1. **Scan (Lexer + CodeGenerator pass 1)**:
   - Tokenize each line, dropping ';' comments
   - Encode every instruction as two bytes
   - Collect label declarations and label references

2. **Resolve (CodeGenerator pass 2)**:
   - Patch each label reference with the label's address

3. **Write (image writer)**:
   - Emit the "v2.0 raw" memory image

Example Usage
-------------
>>> from cpu8_asm.assembler import assemble
>>> assemble("lda #$05\\nsta $10\\nrts").hex(" ")
'08 05 2c 10 d1 00'
"""

from cpu8_asm.assembler.assembler import Assembler, assemble, assemble_file
from cpu8_asm.assembler.lexer import Lexer, Token
from cpu8_asm.assembler.opcodes import (
    AddressingMode,
    OpcodeDefinition,
    OPCODE_TABLE,
    MNEMONICS,
    find_opcode,
)
from cpu8_asm.assembler.operands import classify_operand, strip_operand
from cpu8_asm.assembler.memory import MemoryImage
from cpu8_asm.assembler.symbols import Label, JumpPatch, LabelTable, JumpTable, resolve_labels
from cpu8_asm.assembler.codegen import CodeGenerator
from cpu8_asm.assembler.image import format_image, write_image

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Lexer
    "Lexer",
    "Token",
    # Opcodes
    "AddressingMode",
    "OpcodeDefinition",
    "OPCODE_TABLE",
    "MNEMONICS",
    "find_opcode",
    # Operands
    "classify_operand",
    "strip_operand",
    # Memory and symbols
    "MemoryImage",
    "Label",
    "JumpPatch",
    "LabelTable",
    "JumpTable",
    "resolve_labels",
    # Code generator
    "CodeGenerator",
    # Image output
    "format_image",
    "write_image",
]
