from bs4 import BeautifulSoup, Tag

from src.harvest.domain.models import (
    IndexEntry,
    IndexOfIndices,
    LeafEntry,
    LeafSet,
    ParsedDocument,
    Unrecognized,
)


def parse_document(text: str) -> ParsedDocument:
    """
    Classify a sitemap document.

    <sitemapindex><sitemap><loc> -> IndexOfIndices
    <urlset><url><loc>           -> LeafSet
    anything else                -> Unrecognized (empty or broken markup included)
    """
    if not text or not text.strip():
        return Unrecognized()

    soup = BeautifulSoup(text, "xml")

    index = soup.find("sitemapindex")
    if isinstance(index, Tag):
        return IndexOfIndices(
            entries=tuple(IndexEntry(locator=loc) for loc in _collect_locs(index, "sitemap"))
        )

    urlset = soup.find("urlset")
    if isinstance(urlset, Tag):
        return LeafSet(entries=tuple(LeafEntry(locator=loc) for loc in _collect_locs(urlset, "url")))

    return Unrecognized()


def _collect_locs(container: Tag, item_name: str) -> list[str]:
    locs: list[str] = []
    for item in container.find_all(item_name, recursive=False):
        loc = item.find("loc", recursive=False)
        if loc is None:
            continue
        # <loc> 可能是純文字，也可能包在子節點裡，一律取其文字
        value = loc.get_text().strip()
        if value:
            locs.append(value)
    return locs
