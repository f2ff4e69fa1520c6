from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class IndexEntry:
    locator: str


@dataclass(frozen=True)
class LeafEntry:
    locator: str


@dataclass(frozen=True)
class IndexOfIndices:
    entries: tuple[IndexEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LeafSet:
    entries: tuple[LeafEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Unrecognized:
    pass


ParsedDocument = IndexOfIndices | LeafSet | Unrecognized


@dataclass(frozen=True)
class ChildFailure:
    locator: str
    error_type: str
    message: str


@dataclass(frozen=True)
class SchedulerReport:
    attempted: int
    succeeded: int
    failures: tuple[ChildFailure, ...] = field(default_factory=tuple)

    @property
    def failed(self) -> int:
        return len(self.failures)


@dataclass(frozen=True)
class RunResult:
    root_locator: str
    root_shape: str
    identifiers: tuple[str, ...]
    used_direct_leaves: bool
    child_indices_attempted: int
    child_indices_succeeded: int
    child_indices_failed: int
    failures: tuple[ChildFailure, ...] = field(default_factory=tuple)
    output_path: Path | None = None

    @property
    def identifier_total(self) -> int:
        return len(self.identifiers)
