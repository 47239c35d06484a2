"""Namespaces a process belongs to."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Iterator


@dataclass(frozen=True, eq=False)
class Namespace:
    """A namespace; two namespaces are equal when identifier and device match."""

    ns_type: str
    path: PurePosixPath
    identifier: int
    device_id: int

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Namespace):
            return NotImplemented
        return self.identifier == other.identifier and self.device_id == other.device_id

    def __hash__(self) -> int:
        return hash((self.identifier, self.device_id))


@dataclass
class Namespaces(Mapping):
    """All namespaces of a process, keyed by namespace type."""

    namespaces: dict[str, Namespace] = field(default_factory=dict)

    def __getitem__(self, ns_type: str) -> Namespace:
        return self.namespaces[ns_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self.namespaces)

    def __len__(self) -> int:
        return len(self.namespaces)