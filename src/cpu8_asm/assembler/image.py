"""
Memory Image Writer
===================

Serializes assembled code into Logisim's raw memory image format, which
the simulator's RAM/ROM components load directly.

Image File Format
-----------------
```
v2.0 raw
08 05 2c 10 d1 00
```
- Line 1: format identifier
- Following lines: bytes as two lowercase hex digits, separated by single
  spaces, 16 bytes per line

Only the used part of memory is written (address 0 up to the program
address counter). Formatting performs no validation.

Symbol File Format
------------------
```
; Symbol table
loop $00
done $0a
```
One label per line, ordered by address.
"""

from pathlib import Path
from typing import Mapping

from cpu8_asm.config import DEFAULT_CONFIG


def format_image(
    code: bytes,
    header: str = DEFAULT_CONFIG.image_header,
    bytes_per_line: int = DEFAULT_CONFIG.bytes_per_line,
) -> str:
    """
    Format code as a memory image.

    Args:
        code: Program bytes
        header: Format identifier line
        bytes_per_line: Number of bytes per output line

    Returns:
        The image text, every line newline-terminated
    """
    lines = [header]
    for offset in range(0, len(code), bytes_per_line):
        chunk = code[offset:offset + bytes_per_line]
        lines.append(" ".join(f"{byte:02x}" for byte in chunk))
    return "\n".join(lines) + "\n"


def format_hex_dump(code: bytes, bytes_per_line: int = DEFAULT_CONFIG.bytes_per_line) -> str:
    """Format code as the image body without header (for terminal output)."""
    return format_image(code, header="", bytes_per_line=bytes_per_line).lstrip("\n")


def write_image(filepath: str | Path, code: bytes, **kwargs) -> None:
    """Write code to a memory image file (see format_image for options)."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(format_image(code, **kwargs))


def format_symbols(symbols: Mapping[str, int]) -> str:
    """Format a label table, ordered by address then name."""
    lines = ["; Symbol table"]
    for name, address in sorted(symbols.items(), key=lambda item: (item[1], item[0])):
        lines.append(f"{name} ${address:02x}")
    return "\n".join(lines) + "\n"


def write_symbols(filepath: str | Path, symbols: Mapping[str, int]) -> None:
    """Write a symbol file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(format_symbols(symbols))
