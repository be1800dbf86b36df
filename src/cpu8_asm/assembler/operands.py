"""
Addressing-Mode Classifier
==========================

Determines the addressing mode of an operand token from its shape alone.

| Mode             | Syntax    |
|------------------|-----------|
| immediate        | #$nn      |
| absolute         | $nn       |
| indexed          | $nn,a     |
| indirect         | ($nn)     |
| indexed-indirect | ($nn,a)   |
| indirect-indexed | ($nn),a   |

Only the sigils ('#', '$', '(') and suffixes (',a', ')') decide the mode.
The value part is not checked here, so "$zz" is still an absolute operand;
the encoder rejects the non-hex value afterwards. A token that matches no
pattern is not a literal address and may be a label name.

The patterns forbid ',', '(' and ')' inside the value, which makes them
mutually exclusive: any token matches at most one of them.
"""

import re
import string
from typing import Optional

from cpu8_asm.assembler.opcodes import AddressingMode


_VALUE = r"(?P<value>[^,()]*)"

OPERAND_PATTERNS: dict[AddressingMode, re.Pattern] = {
    AddressingMode.IMMEDIATE: re.compile(rf"#\${_VALUE}"),
    AddressingMode.ABSOLUTE: re.compile(rf"\${_VALUE}"),
    AddressingMode.INDEXED: re.compile(rf"\${_VALUE},a"),
    AddressingMode.INDIRECT: re.compile(rf"\(\${_VALUE}\)"),
    AddressingMode.INDEXED_INDIRECT: re.compile(rf"\(\${_VALUE},a\)"),
    AddressingMode.INDIRECT_INDEXED: re.compile(rf"\(\${_VALUE}\),a"),
}

HEX_DIGITS = frozenset(string.hexdigits)


def matching_modes(token: str) -> list[AddressingMode]:
    """Return every addressing mode whose pattern accepts the token."""
    return [
        mode for mode, pattern in OPERAND_PATTERNS.items()
        if pattern.fullmatch(token)
    ]


def classify_operand(token: str) -> Optional[AddressingMode]:
    """
    Classify an operand token.

    Returns:
        The addressing mode, or None if the token is not a literal address
    """
    for mode, pattern in OPERAND_PATTERNS.items():
        if pattern.fullmatch(token):
            return mode
    return None


def strip_operand(token: str, mode: AddressingMode) -> str:
    """
    Remove the mode decoration and return the value substring.

    Raises:
        ValueError: If the token does not have the shape of the mode
    """
    pattern = OPERAND_PATTERNS.get(mode)
    match = pattern.fullmatch(token) if pattern else None
    if match is None:
        raise ValueError(f"'{token}' is not a {mode} operand")
    return match.group("value")


def is_hex_string(text: str) -> bool:
    """True for a non-empty string made only of hex digits."""
    return bool(text) and all(ch in HEX_DIGITS for ch in text)
