"""Infrastructure adapters for harvesting."""

from src.harvest.infrastructure.csv_sink import CsvIdentifierSink
from src.harvest.infrastructure.fetcher import ResourceFetcher
from src.harvest.infrastructure.identifier_store import IdentifierSet
from src.harvest.infrastructure.sitemap_parser import parse_document

__all__ = ["CsvIdentifierSink", "IdentifierSet", "ResourceFetcher", "parse_document"]
