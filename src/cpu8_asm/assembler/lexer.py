"""
8-bit CPU Assembly Scanner
==========================

This module splits assembly source text into whitespace-delimited tokens.
The grammar needs no finer lexical structure: each line holds an optional
label declaration, a mnemonic and an optional operand, in that order.

Comments
--------
Everything from the first ';' to the end of the line is discarded.

Lines end at "\n" only. Tokens are separated by spaces, tabs and carriage
returns; other characters, including Unicode spaces, belong to a token.

Example
-------
>>> from cpu8_asm.assembler.lexer import Lexer
>>> lexer = Lexer("loop: lda $10   ; load counter", "example.asm")
>>> for token in lexer.tokenize():
...     print(token)
Token('loop:', 1:1)
Token('lda', 1:7)
Token('$10', 1:11)
"""

from dataclasses import dataclass
from typing import Iterator

from cpu8_asm.errors import SourceLocation


COMMENT_CHAR = ";"

# Only these separate tokens; other whitespace is part of a token
SEPARATORS = frozenset(" \t\r")


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single whitespace-delimited word from the source.

    Attributes:
        text: The token text
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    text: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Lexer Implementation
# =============================================================================

def strip_comment(line: str) -> str:
    """Remove everything from the first ';' onward."""
    index = line.find(COMMENT_CHAR)
    if index >= 0:
        return line[:index]
    return line


class Lexer:
    """
    Tokenizes assembly source code line by line.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    The token stream is produced lazily and in source order; it can only
    be consumed once per call to tokenize().
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, one per whitespace-delimited word
        """
        for line_number, line in enumerate(self.source.split("\n"), start=1):
            yield from self._tokenize_line(strip_comment(line), line_number)

    def _tokenize_line(self, line: str, line_number: int) -> Iterator[Token]:
        pos = 0
        length = len(line)

        while pos < length:
            # Skip whitespace
            while pos < length and line[pos] in SEPARATORS:
                pos += 1
            if pos >= length:
                break

            start = pos
            while pos < length and line[pos] not in SEPARATORS:
                pos += 1

            yield Token(line[start:pos], line_number, start + 1, self.filename)


def tokenize(source: str, filename: str = "<input>") -> Iterator[Token]:
    """Convenience wrapper around Lexer(source, filename).tokenize()."""
    return Lexer(source, filename).tokenize()
