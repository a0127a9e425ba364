"""Program metadata structures for LS-8 loaders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class AddressRegion:
    """Represents a contiguous address range written by a loader."""

    start: int
    end: int

    def length(self) -> int:
        return self.end - self.start + 1


@dataclass
class ProgramImage:
    """Describes a program that was copied into memory."""

    name: str = ""
    source_format: str = ""
    regions: List[AddressRegion] = field(default_factory=list)

    def add_region(self, start: int, end: int) -> None:
        self.regions.append(AddressRegion(start, end))

    @property
    def size(self) -> int:
        return sum(region.length() for region in self.regions)
