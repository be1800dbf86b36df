# =============================================================================
# test_codegen.py - Encoder and Scan State Machine Tests
# =============================================================================
# Test coverage includes:
#   - Encoding of every addressing mode
#   - Label declarations and label operands (placeholders + jump table)
#   - Operand validation errors
#   - Capacity limits (memory, labels, jumps, label length)
# =============================================================================

import pytest

from cpu8_asm.assembler.codegen import (
    AwaitingMnemonicOrLabel,
    AwaitingOperand,
    CodeGenerator,
)
from cpu8_asm.assembler.lexer import Lexer, Token
from cpu8_asm.config import AssemblerConfig
from cpu8_asm.errors import (
    AddressFormatError,
    AddressRangeError,
    DuplicateLabelError,
    InvalidLabelError,
    InvalidOperandError,
    JumpTableOverflowError,
    LabelTableOverflowError,
    LabelTooLongError,
    ProgramSizeExceededError,
    UndefinedLabelError,
    UnknownMnemonicError,
)


# =============================================================================
# Helper Functions
# =============================================================================

def generate(source: str, config: AssemblerConfig | None = None) -> bytes:
    """Run both passes over a source string."""
    return CodeGenerator(config).generate(Lexer(source, "<test>").tokenize())


def scan(source: str) -> CodeGenerator:
    """Run only the first pass; placeholders stay unresolved."""
    codegen = CodeGenerator()
    codegen.scan(Lexer(source, "<test>").tokenize())
    return codegen


# =============================================================================
# Addressing Mode Encoding Tests
# =============================================================================

class TestEncoding:
    """Each instruction becomes an encoding byte plus an operand byte."""

    def test_implicit_is_padded(self):
        """Implicit instructions get a zero operand byte."""
        assert generate("rts") == bytes([0xd1, 0x00])

    def test_immediate(self):
        """'#$nn' uses the immediate encoding."""
        assert generate("lda #$05") == bytes([0x08, 0x05])

    def test_absolute(self):
        """'$nn' uses the absolute encoding."""
        assert generate("sta $10") == bytes([0x2c, 0x10])

    def test_indexed(self):
        """'$nn,a' uses the indexed encoding."""
        assert generate("ldb $10,a") == bytes([0xd9, 0x10])

    def test_indirect(self):
        """'($nn)' uses the indirect encoding."""
        assert generate("ldb ($10)") == bytes([0x18, 0x10])

    def test_indexed_indirect(self):
        """'($nn,a)' uses the indexed indirect encoding."""
        assert generate("stb ($20,a)") == bytes([0x4c, 0x20])

    def test_indirect_indexed(self):
        """'($nn),a' uses the indirect indexed encoding."""
        assert generate("stb ($20),a") == bytes([0x45, 0x20])

    def test_uppercase_hex_digits(self):
        """Hex digits are case-insensitive."""
        assert generate("lda #$Ab") == bytes([0x08, 0xab])

    def test_leading_zeros(self):
        """Leading zeros do not count against the range."""
        assert generate("lda #$0000ff") == bytes([0x08, 0xff])

    def test_jump_to_literal_address(self):
        """Jumps also take literal addresses."""
        assert generate("jmp $40") == bytes([0xba, 0x40])
        assert generate("jsr #$40") == bytes([0xbe, 0x40])

    def test_sequence(self):
        """Instructions are laid out back to back."""
        assert generate("lda #$05\nsta $10\nrts") == bytes.fromhex("08052c10d100")

    def test_operand_on_next_line(self):
        """The operand is simply the next token, wherever it is."""
        assert generate("lda\n#$05") == bytes([0x08, 0x05])

    def test_address_counter_stays_even(self):
        """Between instructions the counter is always even."""
        codegen = CodeGenerator()
        for text in ["lda", "#$01", "clc", "loop:", "adc", "#$01", "bne", "loop"]:
            codegen.feed(Token(text, 1, 1))
            if isinstance(codegen._state, AwaitingMnemonicOrLabel):
                assert codegen.address % 2 == 0


# =============================================================================
# State Machine Tests
# =============================================================================

class TestStateMachine:

    def test_starts_ready(self):
        """A new generator waits for a mnemonic or label."""
        assert isinstance(CodeGenerator()._state, AwaitingMnemonicOrLabel)

    def test_mnemonic_with_operand_waits(self):
        """A mnemonic that needs an operand emits nothing yet."""
        codegen = CodeGenerator()
        codegen.feed(Token("lda", 1, 1))
        assert isinstance(codegen._state, AwaitingOperand)
        assert codegen._state.opcode.mnemonic == "lda"
        assert codegen.address == 0

    def test_operand_returns_to_ready(self):
        """The operand completes the instruction."""
        codegen = CodeGenerator()
        codegen.feed(Token("lda", 1, 1))
        codegen.feed(Token("#$05", 1, 5))
        assert isinstance(codegen._state, AwaitingMnemonicOrLabel)
        assert codegen.address == 2

    def test_implicit_stays_ready(self):
        """Implicit instructions are emitted at once."""
        codegen = CodeGenerator()
        codegen.feed(Token("rts", 1, 1))
        assert isinstance(codegen._state, AwaitingMnemonicOrLabel)
        assert codegen.address == 2

    def test_missing_operand_at_end(self):
        """Source ending before the operand is an error."""
        with pytest.raises(InvalidOperandError, match="missing operand for 'lda'") as exc:
            generate("clc\nlda")
        assert exc.value.line == 2

    def test_unknown_mnemonic(self):
        """The line number appears only in the location prefix."""
        with pytest.raises(UnknownMnemonicError) as exc:
            generate("rts\n  xyz $10")
        assert exc.value.token == "xyz"
        assert exc.value.line == 2
        message = str(exc.value)
        assert message.splitlines()[0] == "<test>:2:3: error: unknown mnemonic 'xyz'"
        assert message.count(":2:") == 1

    def test_mnemonics_are_case_sensitive(self):
        """Uppercase mnemonics are unknown."""
        with pytest.raises(UnknownMnemonicError):
            generate("LDA #$05")


# =============================================================================
# Label Tests
# =============================================================================

class TestLabels:

    def test_label_records_current_address(self):
        """A label takes the address of the next instruction."""
        codegen = scan("clc\nsec\nhere: rts")
        assert codegen.get_symbols() == {"here": 4}

    def test_label_emits_nothing(self):
        """A label alone adds no bytes."""
        assert generate("start:") == b""

    def test_backward_reference(self):
        """A reference to an earlier label is patched."""
        assert generate("loop: lda $10\nbne loop") == bytes([0x06, 0x10, 0x9c, 0x00])

    def test_forward_reference(self):
        """A reference to a later label is patched."""
        code = generate("jmp end\nclc\nend: rts")
        assert code == bytes([0xb8, 0x04, 0xa2, 0x00, 0xd1, 0x00])

    def test_placeholder_before_resolution(self):
        """The first pass leaves a zero and a jump entry."""
        codegen = scan("jmp end\nend: rts")
        assert codegen.get_code() == bytes([0xb8, 0x00, 0xd1, 0x00])
        patches = list(codegen.jumps)
        assert len(patches) == 1
        assert patches[0].address == 1
        assert patches[0].label == "end"

    def test_multiple_references_to_one_label(self):
        """Every reference to a label is patched."""
        code = generate("a: beq b\nbcs a\nb: jsr a")
        assert code == bytes([0x9e, 0x04, 0x9a, 0x00, 0xbe, 0x00])

    def test_label_on_its_own_line(self):
        """A label may stand on a line by itself."""
        assert generate("start:\n  jmp start") == bytes([0xb8, 0x00])

    def test_operand_that_looks_like_mnemonic(self):
        """Any non-address operand of a jump names a label."""
        assert generate("clc: sec\njmp clc") == bytes([0xa0, 0x00, 0xb8, 0x00])

    def test_undefined_label(self):
        """The message names the label without a line."""
        with pytest.raises(UndefinedLabelError) as exc:
            generate("jmp missing")
        assert exc.value.label == "missing"
        assert "missing" in str(exc.value)
        assert "line" not in str(exc.value)

    def test_undefined_label_suggests_similar(self):
        """Near misses produce a did-you-mean hint."""
        with pytest.raises(UndefinedLabelError) as exc:
            generate("loop: clc\njmp lopp")
        assert exc.value.similar_labels == ["loop"]
        assert "did you mean 'loop'?" in str(exc.value)

    def test_duplicate_label(self):
        """A second declaration points back at the first."""
        with pytest.raises(DuplicateLabelError) as exc:
            generate("a: clc\na: sec")
        assert exc.value.line == 2
        assert "<test>:1:1" in str(exc.value)

    def test_empty_label(self):
        """A lone ':' is not a label."""
        with pytest.raises(InvalidLabelError):
            generate(": rts")

    def test_label_length_limit(self):
        """Names of 32 characters are allowed, 33 are not."""
        name = "x" * 32
        assert generate(f"{name}: jmp {name}") == bytes([0xb8, 0x00])
        with pytest.raises(LabelTooLongError):
            generate(f"{name}y: rts")

    def test_reference_length_limit(self):
        """Over-long names are rejected in references too."""
        with pytest.raises(LabelTooLongError):
            generate("jmp " + "x" * 33)


# =============================================================================
# Operand Error Tests
# =============================================================================

class TestOperandErrors:

    def test_non_hex_value(self):
        """Non-hex digits raise AddressFormatError."""
        with pytest.raises(AddressFormatError) as exc:
            generate("lda $1g")
        assert exc.value.token == "$1g"
        assert exc.value.line == 1

    def test_empty_value(self):
        """A sigil without digits is malformed."""
        with pytest.raises(AddressFormatError):
            generate("lda #$")

    def test_highest_address_is_accepted(self):
        """$ff is the last valid value."""
        assert generate("lda #$ff") == bytes([0x08, 0xff])

    def test_memory_size_is_out_of_range(self):
        """$100 lies past the end of memory."""
        with pytest.raises(AddressRangeError) as exc:
            generate("lda #$100")
        assert exc.value.value == 0x100

    def test_range_follows_configured_memory(self):
        """The range check uses the configured size."""
        config = AssemblerConfig(memory_size=16)
        assert generate("lda $f", config) == bytes([0x06, 0x0f])
        with pytest.raises(AddressRangeError):
            generate("lda $10", config)

    def test_unsupported_mode(self):
        """The hint lists the modes the opcode supports."""
        with pytest.raises(InvalidOperandError) as exc:
            generate("sta #$10")
        assert exc.value.valid_modes == ["absolute", "indirect"]
        assert "sta supports: absolute, indirect" in str(exc.value)

    def test_label_for_instruction_without_label_form(self):
        """Only jumps and branches take labels."""
        with pytest.raises(InvalidOperandError):
            generate("lda value")

    def test_malformed_operand(self):
        """An unbalanced parenthesis matches no mode."""
        with pytest.raises(InvalidOperandError):
            generate("lda ($10")


# =============================================================================
# Capacity Tests
# =============================================================================

class TestCapacity:

    def test_program_may_fill_memory(self):
        """128 instructions fill all 256 bytes."""
        assert len(generate("clc\n" * 128)) == 256

    def test_program_too_large(self):
        """The 129th instruction does not fit."""
        with pytest.raises(ProgramSizeExceededError) as exc:
            generate("clc\n" * 129)
        assert exc.value.line == 129

    def test_label_after_full_memory(self):
        """A label past the end has no valid address."""
        with pytest.raises(ProgramSizeExceededError):
            generate("clc\n" * 128 + "end:")

    def test_label_limit(self):
        """32 labels fit."""
        source = "\n".join(f"l{i}:" for i in range(32))
        assert len(scan(source).labels) == 32

    def test_label_table_overflow(self):
        """The 33rd label is rejected at its line."""
        source = "\n".join(f"l{i}:" for i in range(33))
        with pytest.raises(LabelTableOverflowError) as exc:
            generate(source)
        assert exc.value.token == "l32"
        assert exc.value.line == 33

    def test_jump_limit(self):
        """64 label references fit."""
        source = "t:\n" + "jmp t\n" * 64
        assert len(generate(source)) == 128

    def test_jump_table_overflow(self):
        """The 65th reference is rejected at its line."""
        source = "t:\n" + "jmp t\n" * 65
        with pytest.raises(JumpTableOverflowError) as exc:
            generate(source)
        assert exc.value.line == 66

    def test_configured_limits(self):
        """Table sizes come from the config."""
        config = AssemblerConfig(max_labels=2, max_jumps=1)
        with pytest.raises(LabelTableOverflowError):
            generate("a:\nb:\nc:", config)
        with pytest.raises(JumpTableOverflowError):
            generate("a: jmp a\njmp a", config)
