"""
8-bit CPU Instruction Set Definition
====================================

This module defines the instruction set of the 8-bit CPU: every mnemonic
together with the microcode entry address used for each addressing mode.

Every instruction occupies two bytes of program memory: the encoding byte
(the microcode address in the control unit) followed by one operand byte.
Instructions without an operand are padded with $00.

Addressing Modes
----------------
1. **IMPLICIT**: No operand (e.g., rts, clc)
   - Example: rts -> $d1 $00

2. **ABSOLUTE**: Memory address (e.g., sta $10)
   - Example: sta $10 -> $2c $10

3. **IMMEDIATE**: Literal value (e.g., lda #$05)
   - Example: lda #$05 -> $08 $05

4. **INDEXED**: Address plus the A register ($nn,a)

5. **INDEXED_INDIRECT**: Pointer at address plus A (($nn,a))

6. **INDIRECT**: Pointer stored at address (($nn))

7. **INDIRECT_INDEXED**: Pointer at address, plus A (($nn),a)

8. **LABEL**: Symbolic jump target (branches, jmp, jsr). The operand
   byte is patched with the label address once all labels are known.

A zero encoding byte marks an unsupported addressing mode.
"""

from dataclasses import dataclass
from enum import Enum, auto
from types import MappingProxyType
from typing import Mapping, Optional


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """Addressing modes of the 8-bit CPU."""
    IMPLICIT = auto()          # rts
    ABSOLUTE = auto()          # $nn
    IMMEDIATE = auto()         # #$nn
    INDEXED = auto()           # $nn,a
    INDEXED_INDIRECT = auto()  # ($nn,a)
    INDIRECT = auto()          # ($nn)
    INDIRECT_INDEXED = auto()  # ($nn),a
    LABEL = auto()             # name

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return self.name.lower().replace("_", "-")


# =============================================================================
# Opcode Definition
# =============================================================================

@dataclass(frozen=True)
class OpcodeDefinition:
    """
    Encoding bytes of one mnemonic, one per addressing mode.

    This dataclass is immutable (frozen) to prevent accidental modification
    of the opcode table at runtime.
    """
    mnemonic: str
    implicit: int = 0x00
    absolute: int = 0x00
    immediate: int = 0x00
    indexed: int = 0x00
    indexed_indirect: int = 0x00
    indirect: int = 0x00
    indirect_indexed: int = 0x00
    label: int = 0x00

    def encoding(self, mode: AddressingMode) -> int:
        """Return the encoding byte for a mode (0 when unsupported)."""
        return getattr(self, mode.name.lower())

    def supports(self, mode: AddressingMode) -> bool:
        return self.encoding(mode) != 0

    @property
    def requires_operand(self) -> bool:
        """True unless the instruction is a single-word implicit form."""
        return not self.implicit

    @property
    def accepts_label(self) -> bool:
        return self.label != 0

    @property
    def valid_modes(self) -> list[str]:
        """Names of the supported addressing modes, for error hints."""
        return [str(mode) for mode in AddressingMode if self.supports(mode)]

    def __repr__(self) -> str:
        modes = ", ".join(
            f"{mode}=${self.encoding(mode):02x}"
            for mode in AddressingMode if self.supports(mode)
        )
        return f"OpcodeDefinition({self.mnemonic!r}, {modes})"


# =============================================================================
# Opcode Table
# =============================================================================
# Microcode entry addresses of the control unit, per addressing mode.
# Branches, jmp and jsr take a label through their immediate entry point.
# =============================================================================

_D = OpcodeDefinition

_OPCODES = (
    # Arithmetic and logic
    _D("adc", absolute=0x5a, immediate=0x57),
    _D("and", absolute=0x70, immediate=0x6d),
    _D("cmp", absolute=0xa6, immediate=0xa4),
    _D("eor", absolute=0x80, immediate=0x7d),
    _D("ora", absolute=0x78, immediate=0x75),
    _D("sbc", absolute=0x62, immediate=0x5f),

    # Shifts, rotates, increments (accumulator)
    _D("asl", implicit=0x8b),
    _D("lsl", implicit=0x85),
    _D("lsr", implicit=0x88),
    _D("rol", implicit=0x8e),
    _D("ror", implicit=0x91),
    _D("dec", implicit=0x6a),
    _D("inc", implicit=0x67),

    # Branches
    _D("bcc", immediate=0x98, label=0x98),
    _D("bcs", immediate=0x9a, label=0x9a),
    _D("beq", immediate=0x9e, label=0x9e),
    _D("bmi", immediate=0x96, label=0x96),
    _D("bne", immediate=0x9c, label=0x9c),
    _D("bpl", immediate=0x94, label=0x94),

    # Jumps and subroutines
    _D("jmp", absolute=0xba, immediate=0xb8, label=0xb8),
    _D("jsr", absolute=0xc8, immediate=0xbe, label=0xbe),
    _D("rts", implicit=0xd1),

    # Flags and misc
    _D("cib", implicit=0xd7),
    _D("clc", implicit=0xa2),
    _D("sec", implicit=0xa0),

    # Stack
    _D("pha", implicit=0xaa),
    _D("pop", implicit=0xb2),

    # Loads and stores
    _D("lda", absolute=0x06, immediate=0x08, indirect=0x0c),
    _D("ldb", absolute=0x14, immediate=0x12, indexed=0xd9,
       indexed_indirect=0x25, indirect=0x18, indirect_indexed=0x1e),
    _D("sta", absolute=0x2c, indirect=0x30),
    _D("stb", absolute=0x3b, indexed=0x36, indexed_indirect=0x4c,
       indirect=0x3f, indirect_indexed=0x45),

    # Register transfers
    _D("tab", implicit=0x53),
    _D("tba", implicit=0x55),
)

OPCODE_TABLE: Mapping[str, OpcodeDefinition] = MappingProxyType(
    {op.mnemonic: op for op in _OPCODES}
)

MNEMONICS: tuple[str, ...] = tuple(sorted(OPCODE_TABLE))

del _D


def find_opcode(mnemonic: str) -> Optional[OpcodeDefinition]:
    """
    Look up an opcode by exact mnemonic.

    Returns:
        The definition, or None when the mnemonic is not part of the set
    """
    return OPCODE_TABLE.get(mnemonic)
