import asyncio
import gzip
import zlib

import aiohttp
from aiohttp import ClientError, ClientResponseError

from src.config.logger_config import logger
from src.harvest.domain.errors import (
    FetchError,
    FetchTimeoutError,
    HttpStatusError,
    NetworkError,
)

DEFAULT_ACCEPT = "application/xml,text/xml,*/*"
GZIP_MAGIC = b"\x1f\x8b"


class ResourceFetcher:
    def __init__(
        self,
        timeout_ms: int = 20000,
        identity: str = "Mozilla/5.0 (compatible; ProductsFromSitemap/1.0)",
        retries: int = 1,
        accept: str = DEFAULT_ACCEPT,
    ) -> None:
        if retries < 1:
            raise ValueError("retries must be >= 1")
        self.timeout_ms = timeout_ms
        self.identity = identity
        self.retries = retries
        self.accept = accept

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.identity, "Accept": self.accept}

    async def fetch(self, session: aiohttp.ClientSession, locator: str) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout_ms / 1000)
        attempt = 1
        while True:
            try:
                return await self._fetch_once(session, locator, timeout)
            except FetchError as exc:
                if attempt >= self.retries or not self._is_retryable(exc):
                    raise
                wait_time = 2**attempt
                logger.warning(
                    "Fetch failed for {} ({}). Attempt {}/{}, retrying in {}s...",
                    locator,
                    exc,
                    attempt,
                    self.retries,
                    wait_time,
                )
                await asyncio.sleep(wait_time)
                attempt += 1

    async def _fetch_once(
        self,
        session: aiohttp.ClientSession,
        locator: str,
        timeout: aiohttp.ClientTimeout,
    ) -> str:
        try:
            async with session.get(locator, headers=self.headers, timeout=timeout) as resp:
                if not 200 <= resp.status < 300:
                    raise HttpStatusError(locator, resp.status)
                payload = await resp.read()
                return self._decode(payload, resp.charset)
        except asyncio.TimeoutError:
            raise FetchTimeoutError(locator, self.timeout_ms) from None
        except ClientResponseError as exc:
            raise HttpStatusError(locator, exc.status) from exc
        except (ClientError, ValueError) as exc:
            raise NetworkError(locator, exc) from exc
        except (OSError, EOFError, zlib.error) as exc:
            raise NetworkError(locator, exc) from exc

    @staticmethod
    def _decode(payload: bytes, charset: str | None) -> str:
        # *.xml.gz 的 sitemap 不會帶 Content-Encoding，需自行解壓
        if payload[:2] == GZIP_MAGIC:
            payload = gzip.decompress(payload)
        try:
            return payload.decode(charset or "utf-8", errors="replace")
        except LookupError:
            return payload.decode("utf-8", errors="replace")

    @staticmethod
    def _is_retryable(exc: FetchError) -> bool:
        if isinstance(exc, HttpStatusError):
            return exc.retryable
        return isinstance(exc, (FetchTimeoutError, NetworkError))
