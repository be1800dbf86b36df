"""
Assembler Configuration
=======================

Capacity limits and output format settings for an assembly run.

The defaults describe the reference 8-bit CPU: 256 bytes of program
memory, a 32-entry label table and a 64-entry jump table. The image
format is Logisim's "v2.0 raw" memory file with 16 bytes per line.

Usage:
    from cpu8_asm.config import AssemblerConfig

    config = AssemblerConfig(max_labels=16)
    asm = Assembler(config=config)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class AssemblerConfig:
    """
    Configuration for one assembler instance.

    Attributes:
        memory_size: Program memory capacity in bytes (also bounds operand values)
        max_labels: Maximum number of label declarations
        max_jumps: Maximum number of label references (forward jumps)
        max_label_length: Maximum characters in a label name
        image_header: First line of the memory image file
        bytes_per_line: Number of bytes per line in the memory image file
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # CAPACITY LIMITS
    # ═══════════════════════════════════════════════════════════════════════════

    memory_size: int = 256
    max_labels: int = 32
    max_jumps: int = 64
    max_label_length: int = 32

    # ═══════════════════════════════════════════════════════════════════════════
    # IMAGE FORMAT
    # ═══════════════════════════════════════════════════════════════════════════

    image_header: str = "v2.0 raw"
    bytes_per_line: int = 16

    def __post_init__(self) -> None:
        # Instructions occupy two bytes, so memory must hold whole instructions
        if self.memory_size <= 0 or self.memory_size % 2:
            raise ValueError(f"memory_size must be a positive even number, got {self.memory_size}")
        if self.memory_size > 256:
            raise ValueError("memory_size cannot exceed 256 (operands are single bytes)")
        for name in ("max_labels", "max_jumps", "max_label_length", "bytes_per_line"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")


DEFAULT_CONFIG = AssemblerConfig()
