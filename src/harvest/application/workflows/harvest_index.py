from dataclasses import dataclass
from pathlib import Path

import aiohttp

from src.config.logger_config import logger
from src.harvest.application.scheduler import BoundedScheduler
from src.harvest.domain.errors import RootDiscoveryError
from src.harvest.domain.models import (
    ChildFailure,
    IndexEntry,
    IndexOfIndices,
    LeafSet,
    RunResult,
    Unrecognized,
)
from src.harvest.domain.rules import IndexFilter, LeafFilter
from src.harvest.infrastructure.csv_sink import CsvIdentifierSink
from src.harvest.infrastructure.fetcher import ResourceFetcher
from src.harvest.infrastructure.identifier_store import IdentifierSet
from src.harvest.infrastructure.sitemap_parser import parse_document


@dataclass(frozen=True)
class HarvestWorkflowConfig:
    worker_count: int = 8
    max_depth: int = 1
    fallback_to_direct_leaves: bool = True
    connector_limit: int = 0
    connector_limit_per_host: int = 10
    connector_ttl_dns_cache: int = 300
    show_progress: bool = True


class HarvestWorkflow:
    def __init__(
        self,
        fetcher: ResourceFetcher,
        leaf_filter: LeafFilter,
        index_filter: IndexFilter,
        sink: CsvIdentifierSink,
        output_path: str | Path,
        config: HarvestWorkflowConfig | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.leaf_filter = leaf_filter
        self.index_filter = index_filter
        self.sink = sink
        self.output_path = Path(output_path)
        self.config = config or HarvestWorkflowConfig()
        self.scheduler = BoundedScheduler(show_progress=self.config.show_progress)

    async def run(self, root_locator: str) -> RunResult:
        connector = aiohttp.TCPConnector(
            limit=self.config.connector_limit,
            limit_per_host=self.config.connector_limit_per_host,
            ttl_dns_cache=self.config.connector_ttl_dns_cache,
        )
        async with aiohttp.ClientSession(connector=connector) as session:
            return await self.run_with_session(session, root_locator)

    async def run_with_session(self, session: aiohttp.ClientSession, root_locator: str) -> RunResult:
        store = IdentifierSet()

        logger.info("Fetching root index {}", root_locator)
        root_doc = parse_document(await self.fetcher.fetch(session, root_locator))

        if isinstance(root_doc, Unrecognized) or not root_doc.entries:
            raise RootDiscoveryError(f"No sitemap entries found in root document {root_locator}")

        used_direct_leaves = False
        attempted = 0
        succeeded = 0
        failures: list[ChildFailure] = []

        if isinstance(root_doc, IndexOfIndices):
            root_shape = "index_of_indices"
            children = [
                entry for entry in root_doc.entries if self.index_filter.matches(entry.locator)
            ]
            logger.info(
                "Root lists {} child indices, {} match the index pattern",
                len(root_doc.entries),
                len(children),
            )
            if children:
                attempted, succeeded, failures = await self._walk(session, children, store)
            elif self.config.fallback_to_direct_leaves:
                logger.info("No matching child indices; treating root entries as leaves")
                used_direct_leaves = True
                await store.add_many(
                    self.leaf_filter.accept_many(entry.locator for entry in root_doc.entries)
                )
            else:
                raise RootDiscoveryError(
                    f"No child indices matching {self.index_filter.pattern.pattern!r} in {root_locator}"
                )
        elif isinstance(root_doc, LeafSet):
            root_shape = "leaf_set"
            used_direct_leaves = True
            logger.info("Root is a leaf set with {} entries", len(root_doc.entries))
            await store.add_many(self.leaf_filter.accept_many(entry.locator for entry in root_doc.entries))
        else:
            raise TypeError(f"Unsupported document type: {type(root_doc).__name__}")

        identifiers = tuple(store.snapshot())
        file_path = self.sink.write(identifiers, self.output_path)
        result = RunResult(
            root_locator=root_locator,
            root_shape=root_shape,
            identifiers=identifiers,
            used_direct_leaves=used_direct_leaves,
            child_indices_attempted=attempted,
            child_indices_succeeded=succeeded,
            child_indices_failed=len(failures),
            failures=tuple(failures),
            output_path=file_path,
        )
        logger.info(
            "Done. Found {} identifiers ({} of {} child indices failed). Wrote: {}",
            result.identifier_total,
            result.child_indices_failed,
            result.child_indices_attempted,
            file_path,
        )
        return result

    async def _walk(
        self,
        session: aiohttp.ClientSession,
        children: list[IndexEntry],
        store: IdentifierSet,
    ) -> tuple[int, int, list[ChildFailure]]:
        attempted = 0
        succeeded = 0
        failures: list[ChildFailure] = []
        batch = children
        depth = 1

        while batch:
            nested: list[IndexEntry] = []
            allow_nested = depth < self.config.max_depth

            async def _process_child(entry: IndexEntry) -> None:
                text = await self.fetcher.fetch(session, entry.locator)
                doc = parse_document(text)
                if isinstance(doc, LeafSet):
                    added = await store.add_many(
                        self.leaf_filter.accept_many(leaf.locator for leaf in doc.entries)
                    )
                    logger.debug("{}: {} leaves, {} new identifiers", entry.locator, len(doc.entries), added)
                elif isinstance(doc, IndexOfIndices):
                    if allow_nested:
                        nested.extend(doc.entries)
                    else:
                        logger.debug("{}: nested index ignored at depth {}", entry.locator, depth)
                else:
                    logger.debug("{}: unrecognized document, skipped", entry.locator)

            logger.info("Fetching {} child indices (depth {})", len(batch), depth)
            report = await self.scheduler.run(batch, self.config.worker_count, _process_child)
            attempted += report.attempted
            succeeded += report.succeeded
            failures.extend(report.failures)

            batch = nested
            depth += 1

        return attempted, succeeded, failures
