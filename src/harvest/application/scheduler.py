import asyncio
from collections.abc import Awaitable, Callable, Sequence

from tqdm import tqdm

from src.config.logger_config import logger
from src.harvest.domain.errors import FetchError
from src.harvest.domain.models import ChildFailure, IndexEntry, SchedulerReport

Work = Callable[[IndexEntry], Awaitable[None]]


class BoundedScheduler:
    def __init__(self, show_progress: bool = True, progress_desc: str = "Child indices") -> None:
        self.show_progress = show_progress
        self.progress_desc = progress_desc

    async def run(
        self,
        items: Sequence[IndexEntry],
        worker_count: int,
        work: Work,
    ) -> SchedulerReport:
        if worker_count < 1:
            raise ValueError("worker_count must be >= 1")
        if not items:
            return SchedulerReport(attempted=0, succeeded=0)

        # asyncio.Semaphore 依等待順序喚醒，tasks 依 items 順序建立 -> FIFO
        semaphore = asyncio.Semaphore(worker_count)
        failures: list[ChildFailure] = []

        with tqdm(
            total=len(items),
            desc=self.progress_desc,
            unit=" index",
            leave=True,
            disable=not self.show_progress,
        ) as progress:

            async def _run_one(item: IndexEntry) -> bool:
                async with semaphore:
                    try:
                        await work(item)
                        return True
                    except Exception as exc:
                        reason = exc.reason if isinstance(exc, FetchError) else str(exc)
                        logger.warning(
                            "Failed {} with error type {}: {}",
                            item.locator,
                            type(exc).__name__,
                            reason,
                        )
                        failures.append(
                            ChildFailure(
                                locator=item.locator,
                                error_type=type(exc).__name__,
                                message=reason,
                            )
                        )
                        return False
                    finally:
                        progress.update(1)

            results = await asyncio.gather(*(_run_one(item) for item in items))

        return SchedulerReport(
            attempted=len(items),
            succeeded=sum(1 for ok in results if ok),
            failures=tuple(failures),
        )
