"""
Program Memory Image
====================

Fixed-capacity byte buffer holding the assembled program, together with
the program address counter (the next free address).

Every instruction is written as a pair of bytes, so the counter is always
even after an instruction has been emitted and never exceeds the capacity.
"""

from cpu8_asm.config import DEFAULT_CONFIG


class MemoryImage:
    """
    Program memory of the target machine.

    Attributes:
        size: Capacity in bytes
        address: Program address counter (number of bytes in use)
    """

    def __init__(self, size: int = DEFAULT_CONFIG.memory_size):
        self.size = size
        self.address = 0
        self._data = bytearray(size)

    def fits(self, count: int) -> bool:
        """True if `count` more bytes fit after the current address."""
        return self.address + count <= self.size

    def emit_word(self, encoding: int, operand: int) -> int:
        """
        Write an instruction at the current address and advance by two.

        Returns:
            Address of the operand byte

        Raises:
            OverflowError: If the instruction does not fit
        """
        if not self.fits(2):
            raise OverflowError(f"memory full at ${self.address:02x}")
        self._data[self.address] = encoding
        self._data[self.address + 1] = operand
        self.address += 2
        return self.address - 1

    def patch(self, address: int, value: int) -> None:
        """Overwrite an already emitted byte."""
        if not 0 <= address < self.address:
            raise IndexError(f"address ${address:02x} has not been emitted")
        self._data[address] = value

    def __getitem__(self, address: int) -> int:
        return self._data[address]

    def __len__(self) -> int:
        return self.address

    def to_bytes(self) -> bytes:
        """Return the used part of memory (address 0 up to the counter)."""
        return bytes(self._data[:self.address])
