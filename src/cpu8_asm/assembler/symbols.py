"""
Label and Jump Tables
=====================

Symbol bookkeeping for the two-pass assembly process.

Pass 1 (scan) records:
- every label declaration with the address where it appeared (LabelTable)
- every operand that names a label, with the address of the placeholder
  byte emitted for it (JumpTable)

Pass 2 (resolve_labels) runs after the scan and patches each placeholder
with the address of its label. Jump targets are addresses, never other
labels, so a single pass over the jump table resolves everything.

Both tables have a fixed capacity; exceeding it is an error rather than
a silent truncation.
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import logging

from cpu8_asm.assembler.memory import MemoryImage
from cpu8_asm.errors import (
    DuplicateLabelError,
    InvalidLabelError,
    JumpTableOverflowError,
    LabelTableOverflowError,
    LabelTooLongError,
    SourceLocation,
    UndefinedLabelError,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Table Entries
# =============================================================================

@dataclass(frozen=True)
class Label:
    """
    Label table entry.

    Attributes:
        name: Label name (without the trailing ':')
        address: Memory address at which the label was declared
        location: Where the label was declared
    """
    name: str
    address: int
    location: Optional[SourceLocation] = None


@dataclass(frozen=True)
class JumpPatch:
    """
    Jump table entry: an operand byte waiting for a label address.

    Attributes:
        address: Memory address of the placeholder operand byte
        label: Name of the label it must resolve to
        location: Where the label was referenced
    """
    address: int
    label: str
    location: Optional[SourceLocation] = None


# =============================================================================
# Label Table
# =============================================================================

class LabelTable:
    """
    Declared labels, in declaration order.

    Usage:
        labels = LabelTable(max_labels=32, max_length=32)
        labels.declare("loop", 0x04, location)
        labels.lookup("loop").address  # -> 4
    """

    def __init__(self, max_labels: int = 32, max_length: int = 32):
        self.max_labels = max_labels
        self.max_length = max_length
        self._labels: dict[str, Label] = {}

    def declare(
        self,
        name: str,
        address: int,
        location: Optional[SourceLocation] = None,
    ) -> Label:
        """
        Record a label declaration.

        Raises:
            InvalidLabelError: If the name is empty
            LabelTooLongError: If the name is longer than max_length
            DuplicateLabelError: If the name was already declared
            LabelTableOverflowError: If the table is full
        """
        if not name:
            raise InvalidLabelError(f"{name}:", location)
        if len(name) > self.max_length:
            raise LabelTooLongError(name, self.max_length, location)
        if name in self._labels:
            raise DuplicateLabelError(
                name,
                location=location,
                original_location=self._labels[name].location,
            )
        if len(self._labels) >= self.max_labels:
            raise LabelTableOverflowError(name, self.max_labels, location)

        label = Label(name, address, location)
        self._labels[name] = label
        logger.debug(f"Label '{name}' declared at ${address:02x}")
        return label

    def lookup(self, name: str) -> Optional[Label]:
        return self._labels.get(name)

    def similar(self, name: str) -> list[str]:
        """
        Find labels with similar names for error hints.

        Uses simple edit distance heuristic.
        """
        name_lower = name.lower()
        similar = []

        for other in self._labels:
            other_lower = other.lower()
            if (
                other_lower == name_lower or
                abs(len(other) - len(name)) <= 1 and
                _edit_distance(name_lower, other_lower) <= 2
            ):
                similar.append(other)

        return similar[:3]

    def as_dict(self) -> dict[str, int]:
        """Return a dictionary of label names to addresses."""
        return {label.name: label.address for label in self._labels.values()}

    def __contains__(self, name: str) -> bool:
        return name in self._labels

    def __iter__(self) -> Iterator[Label]:
        return iter(self._labels.values())

    def __len__(self) -> int:
        return len(self._labels)


# =============================================================================
# Jump Table
# =============================================================================

class JumpTable:
    """Label references awaiting resolution, in insertion order."""

    def __init__(self, max_jumps: int = 64, max_length: int = 32):
        self.max_jumps = max_jumps
        self.max_length = max_length
        self._patches: list[JumpPatch] = []

    def add(
        self,
        address: int,
        label: str,
        location: Optional[SourceLocation] = None,
    ) -> JumpPatch:
        """
        Record a placeholder byte that must receive a label's address.

        Raises:
            JumpTableOverflowError: If the table is full
            LabelTooLongError: If the label name is longer than max_length
        """
        if len(self._patches) >= self.max_jumps:
            raise JumpTableOverflowError(label, self.max_jumps, location)
        if len(label) > self.max_length:
            raise LabelTooLongError(label, self.max_length, location)

        patch = JumpPatch(address, label, location)
        self._patches.append(patch)
        logger.debug(f"Reference to '{label}' pending at ${address:02x}")
        return patch

    def __iter__(self) -> Iterator[JumpPatch]:
        return iter(self._patches)

    def __len__(self) -> int:
        return len(self._patches)


# =============================================================================
# Label Resolver
# =============================================================================

def resolve_labels(memory: MemoryImage, labels: LabelTable, jumps: JumpTable) -> int:
    """
    Patch every jump placeholder with the address of its label.

    Entries are processed in insertion order; the first unknown label
    aborts resolution.

    Returns:
        Number of patched placeholders

    Raises:
        UndefinedLabelError: If a referenced label was never declared
    """
    count = 0
    for patch in jumps:
        label = labels.lookup(patch.label)
        if label is None:
            raise UndefinedLabelError(
                patch.label,
                reference=patch.location,
                similar_labels=labels.similar(patch.label),
            )
        memory.patch(patch.address, label.address)
        count += 1

    logger.debug(f"Resolved {count} label reference(s)")
    return count


def _edit_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min(distances[j], distances[j + 1], new_distances[-1]))
        distances = new_distances
    return distances[-1]
