# 執行參數：預設值可由環境變數 (或 .env) 覆寫

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_ROOT_URL = "https://www.filson.com/sitemap.xml"
DEFAULT_OUTPUT_PATH = "exports/products_map.csv"
DEFAULT_CONCURRENCY = 8
DEFAULT_TIMEOUT_MS = 20000
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ProductsFromSitemap/1.0)"
DEFAULT_HEADER = "product_url"
DEFAULT_LEAF_PATTERN = r"/products/"
DEFAULT_INDEX_PATTERN = r"product"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class HarvestSettings:
    root_url: str = DEFAULT_ROOT_URL
    output_path: str = DEFAULT_OUTPUT_PATH
    concurrency: int = DEFAULT_CONCURRENCY
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT
    header: str = DEFAULT_HEADER
    leaf_pattern: str = DEFAULT_LEAF_PATTERN
    index_pattern: str = DEFAULT_INDEX_PATTERN
    retries: int = 1
    max_depth: int = 1
    fallback_to_direct_leaves: bool = True


def load_settings(env: dict[str, str] | None = None) -> HarvestSettings:
    """Build settings from the environment; `env` replaces os.environ (tests)."""
    if env is None:
        load_dotenv()
        env = dict(os.environ)

    return HarvestSettings(
        root_url=env.get("HARVEST_ROOT_URL", DEFAULT_ROOT_URL),
        output_path=env.get("HARVEST_OUTPUT_PATH", DEFAULT_OUTPUT_PATH),
        concurrency=_get_int(env, "HARVEST_CONCURRENCY", DEFAULT_CONCURRENCY),
        timeout_ms=_get_int(env, "HARVEST_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        user_agent=env.get("HARVEST_USER_AGENT", DEFAULT_USER_AGENT),
        header=env.get("HARVEST_CSV_HEADER", DEFAULT_HEADER),
        leaf_pattern=env.get("HARVEST_LEAF_PATTERN", DEFAULT_LEAF_PATTERN),
        index_pattern=env.get("HARVEST_INDEX_PATTERN", DEFAULT_INDEX_PATTERN),
        retries=_get_int(env, "HARVEST_RETRIES", 1),
        max_depth=_get_int(env, "HARVEST_MAX_DEPTH", 1),
        fallback_to_direct_leaves=_get_bool(env, "HARVEST_FALLBACK_DIRECT_LEAVES", True),
    )


def _get_int(env: dict[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be >= 1, got {value}")
    return value


def _get_bool(env: dict[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
