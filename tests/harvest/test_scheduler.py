import asyncio
import unittest

from src.config.logger_config import logger
from src.harvest.application.scheduler import BoundedScheduler
from src.harvest.domain.errors import HttpStatusError
from src.harvest.domain.models import IndexEntry


def make_entries(count: int) -> list[IndexEntry]:
    return [IndexEntry(f"https://shop.test/sitemap_products_{i}.xml") for i in range(count)]


class BoundedSchedulerTests(unittest.IsolatedAsyncioTestCase):
    async def test_never_exceeds_worker_count(self):
        scheduler = BoundedScheduler(show_progress=False)
        active = 0
        peak = 0

        async def work(_entry: IndexEntry) -> None:
            nonlocal active, peak
            active += 1
            peak = max(peak, active)
            await asyncio.sleep(0.01)
            active -= 1

        report = await scheduler.run(make_entries(20), 3, work)

        self.assertEqual(peak, 3)
        self.assertEqual(report.attempted, 20)
        self.assertEqual(report.succeeded, 20)
        self.assertEqual(report.failed, 0)

    async def test_items_start_in_arrival_order(self):
        scheduler = BoundedScheduler(show_progress=False)
        entries = make_entries(10)
        started: list[str] = []

        async def work(entry: IndexEntry) -> None:
            started.append(entry.locator)
            await asyncio.sleep(0.001)

        await scheduler.run(entries, 2, work)
        self.assertEqual(started, [entry.locator for entry in entries])

    async def test_failures_are_isolated_and_recorded(self):
        scheduler = BoundedScheduler(show_progress=False)
        entries = make_entries(6)
        completed: list[str] = []

        async def work(entry: IndexEntry) -> None:
            if entry.locator.endswith(("_1.xml", "_4.xml")):
                raise HttpStatusError(entry.locator, 500)
            await asyncio.sleep(0)
            completed.append(entry.locator)

        report = await scheduler.run(entries, 2, work)

        self.assertEqual(report.attempted, 6)
        self.assertEqual(report.succeeded, 4)
        self.assertEqual(report.failed, 2)
        self.assertEqual(len(completed), 4)
        self.assertEqual(
            sorted(f.locator for f in report.failures),
            [entries[1].locator, entries[4].locator],
        )
        self.assertTrue(all(f.error_type == "HttpStatusError" for f in report.failures))
        self.assertTrue(all("HTTP 500" in f.message for f in report.failures))

    async def test_duplicate_items_are_each_processed(self):
        scheduler = BoundedScheduler(show_progress=False)
        calls: list[str] = []

        async def work(entry: IndexEntry) -> None:
            calls.append(entry.locator)

        entry = IndexEntry("https://shop.test/sitemap_products_1.xml")
        report = await scheduler.run([entry, entry], 4, work)
        self.assertEqual(len(calls), 2)
        self.assertEqual(report.succeeded, 2)

    async def test_empty_input_returns_empty_report(self):
        scheduler = BoundedScheduler(show_progress=False)

        async def work(_entry: IndexEntry) -> None:
            raise AssertionError("should not be called")

        report = await scheduler.run([], 4, work)
        self.assertEqual((report.attempted, report.succeeded, report.failed), (0, 0, 0))

    async def test_invalid_worker_count_is_rejected(self):
        scheduler = BoundedScheduler(show_progress=False)

        async def work(_entry: IndexEntry) -> None:
            return None

        with self.assertRaises(ValueError):
            await scheduler.run(make_entries(1), 0, work)

    async def test_failure_warning_names_locator_once_with_error_type(self):
        scheduler = BoundedScheduler(show_progress=False)
        entry = IndexEntry("https://shop.test/sitemap_products_9.xml")
        messages: list[str] = []
        handler_id = logger.add(messages.append, level="WARNING", format="{message}")

        async def work(item: IndexEntry) -> None:
            raise HttpStatusError(item.locator, 404)

        try:
            report = await scheduler.run([entry], 1, work)
        finally:
            logger.remove(handler_id)

        self.assertEqual(len(messages), 1)
        self.assertEqual(messages[0].count(entry.locator), 1)
        self.assertIn("HttpStatusError", messages[0])
        self.assertIn("HTTP 404", messages[0])
        self.assertEqual(report.failures[0].message, "HTTP 404")
