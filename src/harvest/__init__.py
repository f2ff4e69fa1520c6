"""Sitemap harvesting package."""

from src.harvest.domain.models import RunResult
from src.harvest.harvest import run_harvest, run_harvest_async

__all__ = [
    "RunResult",
    "run_harvest",
    "run_harvest_async",
]
