"""Domain models, error taxonomy and deterministic rules for harvesting."""

from src.harvest.domain.errors import (
    FetchError,
    FetchTimeoutError,
    HarvestError,
    HttpStatusError,
    NetworkError,
    RootDiscoveryError,
)
from src.harvest.domain.models import (
    ChildFailure,
    IndexEntry,
    IndexOfIndices,
    LeafEntry,
    LeafSet,
    ParsedDocument,
    RunResult,
    SchedulerReport,
    Unrecognized,
)
from src.harvest.domain.rules import IndexFilter, LeafFilter, canonicalize_locator

__all__ = [
    "canonicalize_locator",
    "ChildFailure",
    "FetchError",
    "FetchTimeoutError",
    "HarvestError",
    "HttpStatusError",
    "IndexEntry",
    "IndexFilter",
    "IndexOfIndices",
    "LeafEntry",
    "LeafFilter",
    "LeafSet",
    "NetworkError",
    "ParsedDocument",
    "RootDiscoveryError",
    "RunResult",
    "SchedulerReport",
    "Unrecognized",
]
