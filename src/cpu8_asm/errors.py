"""
cpu8-asm Error Hierarchy
========================

This module defines the exception hierarchy for the 8-bit CPU assembler.
All exceptions inherit from Cpu8Error, allowing callers to catch every
toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
Cpu8Error (base)
├── AssemblerError (assembler-related)
│   ├── UnknownMnemonicError - token is neither a mnemonic nor a label
│   ├── InvalidOperandError - operand missing or unusable for the opcode
│   ├── AddressFormatError - operand value is not a hex number
│   ├── AddressRangeError - operand value outside program memory
│   ├── LabelError (label declaration problems)
│   │   ├── LabelTooLongError - label name exceeds the length limit
│   │   ├── InvalidLabelError - empty label name
│   │   └── DuplicateLabelError - label declared twice
│   ├── LabelTableOverflowError - too many label declarations
│   ├── JumpTableOverflowError - too many label references
│   ├── ProgramSizeExceededError - program does not fit into memory
│   └── UndefinedLabelError - reference to a label never declared
└── MissingFileError - source file missing or unreadable

Every assembler error is fatal: the first one detected aborts the run and
no output file is written.

Error messages follow this format:
    filename:line:column: error: description
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Cpu8Error(Exception):
    """
    Base exception for all cpu8-asm errors.

        try:
            assembler.assemble_file("program.asm")
        except Cpu8Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(Cpu8Error):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        token: The offending source token (optional)
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.token = token
        self.location = location
        self.hint = hint
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Source line number of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location and hint.

        Example output:
            demo.asm:3:5: error: unknown mnemonic 'ldx'
            hint: labels must end with ':'
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class UnknownMnemonicError(AssemblerError):
    """
    Token is neither a known mnemonic nor a label declaration.

    Example:
        ldx $10   ; Error: 'ldx' is not part of the instruction set
    """

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
    ):
        super().__init__(
            f"unknown mnemonic '{token}'",
            token=token,
            location=location,
            hint="label declarations must end with ':'",
        )


class InvalidOperandError(AssemblerError):
    """
    Operand is missing or cannot be used with the instruction.

    Raised when the operand matches no addressing mode and the opcode
    does not take a label, when it uses an addressing mode the opcode
    does not support, or when the source ends before the operand.

    Example:
        sta #$10  ; Error: cannot store to a literal value
    """

    def __init__(
        self,
        mnemonic: str,
        token: Optional[str],
        location: Optional[SourceLocation] = None,
        valid_modes: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.valid_modes = valid_modes or []

        hint = None
        if self.valid_modes:
            hint = f"{mnemonic} supports: {', '.join(self.valid_modes)}"

        if token is None:
            message = f"missing operand for '{mnemonic}'"
        else:
            message = (
                f"invalid or missing operand '{token}' "
                f"for '{mnemonic}'"
            )

        super().__init__(message, token=token, location=location, hint=hint)


class AddressFormatError(AssemblerError):
    """
    Operand value is not a hexadecimal number.

    Example:
        lda $1g   ; Error: 'g' is not a hex digit
    """

    def __init__(self, token: str, location: Optional[SourceLocation] = None):
        super().__init__(
            f"invalid address format '{token}'",
            token=token,
            location=location,
            hint="operand values are hex digits, e.g. $0f",
        )


class AddressRangeError(AssemblerError):
    """
    Operand value lies outside the program memory.

    Example:
        lda $100  ; Error: memory addresses end at $ff
    """

    def __init__(
        self,
        token: str,
        value: int,
        memory_size: int,
        location: Optional[SourceLocation] = None,
    ):
        self.value = value
        self.memory_size = memory_size
        super().__init__(
            f"invalid address range '{token}'",
            token=token,
            location=location,
            hint=f"value must be between $00 and ${memory_size - 1:02x}",
        )


class LabelError(AssemblerError):
    """Base class for problems with a label declaration or reference."""
    pass


class LabelTooLongError(LabelError):
    """Label name exceeds the maximum length."""

    def __init__(
        self,
        label: str,
        max_length: int,
        location: Optional[SourceLocation] = None,
    ):
        self.label = label
        self.max_length = max_length
        super().__init__(
            f"label name is too long '{label}'",
            token=label,
            location=location,
            hint=f"labels are limited to {max_length} characters",
        )


class InvalidLabelError(LabelError):
    """Label declaration without a name (a lone ':')."""

    def __init__(self, token: str, location: Optional[SourceLocation] = None):
        super().__init__(
            f"empty label name '{token}'",
            token=token,
            location=location,
        )


class DuplicateLabelError(LabelError):
    """
    Label declared more than once.

    Includes the location of the first declaration when available.
    """

    def __init__(
        self,
        label: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
    ):
        self.label = label
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{label}' was first declared at {original_location}"

        super().__init__(
            f"duplicate label '{label}'",
            token=label,
            location=location,
            hint=hint,
        )


class LabelTableOverflowError(AssemblerError):
    """More label declarations than the label table can hold."""

    def __init__(
        self,
        label: str,
        max_labels: int,
        location: Optional[SourceLocation] = None,
    ):
        self.max_labels = max_labels
        super().__init__(
            f"exceeded label count '{label}'",
            token=label,
            location=location,
            hint=f"at most {max_labels} labels can be declared",
        )


class JumpTableOverflowError(AssemblerError):
    """More label references than the jump table can hold."""

    def __init__(
        self,
        label: str,
        max_jumps: int,
        location: Optional[SourceLocation] = None,
    ):
        self.max_jumps = max_jumps
        super().__init__(
            f"exceeded jump count '{label}'",
            token=label,
            location=location,
            hint=f"at most {max_jumps} label references are allowed",
        )


class ProgramSizeExceededError(AssemblerError):
    """The program does not fit into the fixed program memory."""

    def __init__(
        self,
        token: str,
        memory_size: int,
        location: Optional[SourceLocation] = None,
    ):
        self.memory_size = memory_size
        super().__init__(
            f"program exceeds memory size '{token}'",
            token=token,
            location=location,
            hint=f"program memory holds {memory_size} bytes",
        )


class UndefinedLabelError(AssemblerError):
    """
    Reference to a label that is never declared.

    Raised by the resolution pass, after the whole source has been scanned.
    The message names only the label; the location of the reference is kept
    on the exception for callers that want it.
    """

    def __init__(
        self,
        label: str,
        reference: Optional[SourceLocation] = None,
        similar_labels: Optional[list[str]] = None,
    ):
        self.label = label
        self.reference = reference
        self.similar_labels = similar_labels or []

        hint = None
        if self.similar_labels:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_labels[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"could not find label '{label}'",
            token=label,
            hint=hint,
        )


# =============================================================================
# File Exceptions
# =============================================================================

class MissingFileError(Cpu8Error):
    """
    Source file does not exist or cannot be read.

    Attributes:
        path: The path that was requested
        reason: Underlying OS error text
    """

    def __init__(self, path: str, reason: str = "no such file"):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read '{path}': {reason}")
