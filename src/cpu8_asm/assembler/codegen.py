"""
8-bit CPU Code Generator
========================

This module turns the token stream into machine code. It implements a
two-pass assembly process:

Pass 1 (Scan and Encode)
------------------------
- Walk the tokens with a two-state machine: either a mnemonic/label is
  expected, or the operand of the previous mnemonic
- Encode every instruction into two bytes of program memory
- Record label declarations in the label table
- Emit a $00 placeholder for each label operand and record it in the
  jump table

Pass 2 (Resolve)
----------------
- Patch every placeholder with the address of its label

State Machine
-------------
```
AwaitingMnemonicOrLabel --(mnemonic with operand)--> AwaitingOperand(op)
AwaitingMnemonicOrLabel --(implicit mnemonic)------> encode, stay
AwaitingMnemonicOrLabel --(name:)------------------> declare label, stay
AwaitingOperand(op) -----(operand)-----------------> encode, back
```
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Union
import logging

from cpu8_asm.assembler.lexer import Token
from cpu8_asm.assembler.memory import MemoryImage
from cpu8_asm.assembler.opcodes import AddressingMode, OpcodeDefinition, find_opcode
from cpu8_asm.assembler.operands import classify_operand, is_hex_string, strip_operand
from cpu8_asm.assembler.symbols import JumpTable, LabelTable, resolve_labels
from cpu8_asm.config import DEFAULT_CONFIG, AssemblerConfig
from cpu8_asm.errors import (
    AddressFormatError,
    AddressRangeError,
    InvalidOperandError,
    ProgramSizeExceededError,
    UnknownMnemonicError,
)

logger = logging.getLogger(__name__)


LABEL_SUFFIX = ":"


# =============================================================================
# Scan States
# =============================================================================

@dataclass(frozen=True)
class AwaitingMnemonicOrLabel:
    """Start of an instruction: a mnemonic or a label declaration follows."""


@dataclass(frozen=True)
class AwaitingOperand:
    """A mnemonic was read; its operand is the next token."""
    opcode: OpcodeDefinition
    token: Token


ScanState = Union[AwaitingMnemonicOrLabel, AwaitingOperand]

READY = AwaitingMnemonicOrLabel()


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates machine code for one assembly run.

    The code generator owns:
    - The program memory image and address counter
    - The label table (declarations)
    - The jump table (pending label references)

    Usage:
        codegen = CodeGenerator()
        code = codegen.generate(Lexer(source).tokenize())
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.memory = MemoryImage(self.config.memory_size)
        self.labels = LabelTable(self.config.max_labels, self.config.max_label_length)
        self.jumps = JumpTable(self.config.max_jumps, self.config.max_label_length)
        self._state: ScanState = READY

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, tokens: Iterable[Token]) -> bytes:
        """
        Run both passes over a token stream.

        Returns:
            The encoded program (address 0 up to the final counter)

        Raises:
            AssemblerError: On the first error detected
        """
        self.scan(tokens)
        self.resolve()
        code = self.memory.to_bytes()
        logger.debug(f"Generated {len(code)} bytes")
        return code

    def scan(self, tokens: Iterable[Token]) -> None:
        """Pass 1: encode instructions and collect labels and references."""
        for token in tokens:
            self.feed(token)
        self.finish()

    def feed(self, token: Token) -> None:
        """Advance the state machine by one token."""
        if isinstance(self._state, AwaitingOperand):
            self._encode_operand(self._state.opcode, token)
            self._state = READY
        else:
            self._state = self._handle_statement(token)

    def finish(self) -> None:
        """
        Check that the source did not end in the middle of an instruction.

        Raises:
            InvalidOperandError: If a mnemonic is still waiting for its operand
        """
        if isinstance(self._state, AwaitingOperand):
            opcode = self._state.opcode
            raise InvalidOperandError(
                opcode.mnemonic,
                None,
                self._state.token.location,
                valid_modes=opcode.valid_modes,
            )

    def resolve(self) -> None:
        """Pass 2: patch label placeholders."""
        resolve_labels(self.memory, self.labels, self.jumps)

    def get_code(self) -> bytes:
        return self.memory.to_bytes()

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of label names to addresses."""
        return self.labels.as_dict()

    @property
    def address(self) -> int:
        """Current program address counter."""
        return self.memory.address

    # =========================================================================
    # Pass 1 Helpers
    # =========================================================================

    def _handle_statement(self, token: Token) -> ScanState:
        text = token.text
        opcode = find_opcode(text)

        if opcode is not None:
            if opcode.requires_operand:
                return AwaitingOperand(opcode, token)
            self._emit(token, opcode.implicit, 0x00)
            return READY

        if text.endswith(LABEL_SUFFIX):
            self._declare_label(token)
            return READY

        raise UnknownMnemonicError(text, token.location)

    def _declare_label(self, token: Token) -> None:
        name = token.text[:-len(LABEL_SUFFIX)]

        # The address of a label must fit into an operand byte
        if self.memory.address >= self.memory.size:
            raise ProgramSizeExceededError(token.text, self.memory.size, token.location)

        self.labels.declare(name, self.memory.address, token.location)

    def _encode_operand(self, opcode: OpcodeDefinition, token: Token) -> None:
        mode = classify_operand(token.text)

        if mode is not None and opcode.supports(mode):
            value = self._parse_value(token, mode)
            self._emit(token, opcode.encoding(mode), value)
        elif mode is None and opcode.accepts_label:
            operand_address = self._emit(token, opcode.label, 0x00)
            self.jumps.add(operand_address, token.text, token.location)
        else:
            raise InvalidOperandError(
                opcode.mnemonic,
                token.text,
                token.location,
                valid_modes=opcode.valid_modes,
            )

    def _parse_value(self, token: Token, mode: AddressingMode) -> int:
        digits = strip_operand(token.text, mode)

        if not is_hex_string(digits):
            raise AddressFormatError(token.text, token.location)

        value = int(digits, 16)
        if value > self.config.memory_size - 1:
            raise AddressRangeError(
                token.text, value, self.config.memory_size, token.location
            )
        return value

    def _emit(self, token: Token, encoding: int, operand: int) -> int:
        """Write one instruction; returns the operand byte's address."""
        if not self.memory.fits(2):
            raise ProgramSizeExceededError(token.text, self.memory.size, token.location)
        return self.memory.emit_word(encoding, operand)
