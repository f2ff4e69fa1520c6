from __future__ import annotations
import asyncio
from dataclasses import replace
from pathlib import Path

from src.config.settings import (
    DEFAULT_HEADER,
    DEFAULT_INDEX_PATTERN,
    DEFAULT_LEAF_PATTERN,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_ROOT_URL,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_USER_AGENT,
)
from src.harvest.application.workflows.harvest_index import HarvestWorkflow, HarvestWorkflowConfig
from src.harvest.domain.models import RunResult
from src.harvest.domain.rules import IndexFilter, LeafFilter
from src.harvest.infrastructure.csv_sink import CsvIdentifierSink
from src.harvest.infrastructure.fetcher import ResourceFetcher


async def run_harvest_async(
    *,
    root_url: str = DEFAULT_ROOT_URL,
    output_path: str | Path = DEFAULT_OUTPUT_PATH,
    header: str = DEFAULT_HEADER,
    leaf_pattern: str = DEFAULT_LEAF_PATTERN,
    index_pattern: str = DEFAULT_INDEX_PATTERN,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    user_agent: str = DEFAULT_USER_AGENT,
    retries: int = 1,
    workflow_config: HarvestWorkflowConfig | None = None,
    show_progress: bool = True,
) -> RunResult:
    fetcher = ResourceFetcher(timeout_ms=timeout_ms, identity=user_agent, retries=retries)
    workflow = HarvestWorkflow(
        fetcher=fetcher,
        leaf_filter=LeafFilter(leaf_pattern),
        index_filter=IndexFilter(index_pattern),
        sink=CsvIdentifierSink(header=header),
        output_path=output_path,
        config=(
            replace(workflow_config, show_progress=show_progress)
            if workflow_config is not None
            else HarvestWorkflowConfig(show_progress=show_progress)
        ),
    )
    return await workflow.run(root_url)


def run_harvest(
    *,
    root_url: str = DEFAULT_ROOT_URL,
    output_path: str | Path = DEFAULT_OUTPUT_PATH,
    header: str = DEFAULT_HEADER,
    leaf_pattern: str = DEFAULT_LEAF_PATTERN,
    index_pattern: str = DEFAULT_INDEX_PATTERN,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    user_agent: str = DEFAULT_USER_AGENT,
    retries: int = 1,
    workflow_config: HarvestWorkflowConfig | None = None,
    show_progress: bool = True,
) -> RunResult:
    return asyncio.run(
        run_harvest_async(
            root_url=root_url,
            output_path=output_path,
            header=header,
            leaf_pattern=leaf_pattern,
            index_pattern=index_pattern,
            timeout_ms=timeout_ms,
            user_agent=user_agent,
            retries=retries,
            workflow_config=workflow_config,
            show_progress=show_progress,
        )
    )
