"""
8-bit CPU Assembler - Main Interface
====================================

This module provides the main Assembler class, which is the primary interface
for assembling 8-bit CPU source code. It coordinates the lexer and the code
generator and writes the resulting memory image.

Example Usage
-------------
>>> from cpu8_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... loop: lda $10   ; load counter
...       bne loop
... ''')
>>> asm.get_code().hex(" ")
'06 10 9c 00'
>>> asm.write_image("loop.out")

Command-Line Usage
------------------
    $ cpuasm program.asm program.out
"""

from pathlib import Path
from typing import Optional
import logging

from cpu8_asm.assembler.codegen import CodeGenerator
from cpu8_asm.assembler.image import format_image, write_image, write_symbols
from cpu8_asm.assembler.lexer import Lexer
from cpu8_asm.config import DEFAULT_CONFIG, AssemblerConfig
from cpu8_asm.errors import MissingFileError

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main 8-bit CPU assembler class.

    Each call to assemble_string() or assemble_file() is an independent run
    with fresh memory and symbol tables. The result of the last successful
    run stays available for the get_* and write_* methods; a failed run
    leaves no result behind.

    Attributes:
        config: Capacity limits and image format settings
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._codegen: Optional[CodeGenerator] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> bytes:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Encoded program bytes

        Raises:
            AssemblerError: If assembly fails
        """
        self._codegen = None
        codegen = CodeGenerator(self.config)
        code = codegen.generate(Lexer(source, filename).tokenize())
        self._codegen = codegen

        logger.info(
            f"Assembled {filename}: {len(code)} bytes, "
            f"{len(codegen.labels)} label(s), {len(codegen.jumps)} reference(s)"
        )
        return code

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble source code from a file.

        Raises:
            AssemblerError: If assembly fails
            MissingFileError: If the source file cannot be read
        """
        filepath = Path(filepath)

        try:
            source = filepath.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
            raise MissingFileError(str(filepath), reason) from e

        logger.debug(f"Assembling {filepath}...")
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _result(self) -> CodeGenerator:
        if self._codegen is None:
            raise RuntimeError("no program has been assembled")
        return self._codegen

    def get_code(self) -> bytes:
        """Return the encoded program bytes."""
        return self._result().get_code()

    def get_size(self) -> int:
        """Return the number of encoded bytes."""
        return self._result().address

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of label names to addresses."""
        return self._result().get_symbols()

    def format_image(self) -> str:
        """Return the memory image text."""
        return format_image(
            self.get_code(),
            header=self.config.image_header,
            bytes_per_line=self.config.bytes_per_line,
        )

    def write_image(self, filepath: str | Path) -> None:
        """
        Write the memory image file.

        Args:
            filepath: Output file path
        """
        write_image(
            filepath,
            self.get_code(),
            header=self.config.image_header,
            bytes_per_line=self.config.bytes_per_line,
        )
        logger.debug(f"Wrote {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the label table to a symbol file."""
        write_symbols(filepath, self.get_symbols())
        logger.debug(f"Wrote symbols to {filepath}")


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Convenience function to assemble source code.

    Returns:
        Encoded program bytes

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Convenience function to assemble a file.

    Raises:
        AssemblerError: If assembly fails
        MissingFileError: If the source file cannot be read
    """
    return Assembler(config).assemble_file(filepath)
