import csv
import os
from collections.abc import Iterable
from pathlib import Path

DEFAULT_HEADER = "product_url"


class CsvIdentifierSink:
    def __init__(self, header: str = DEFAULT_HEADER) -> None:
        self.header = header

    def write(self, identifiers: Iterable[str], destination: str | Path) -> Path:
        file_path = Path(destination)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        rows = sorted(identifiers)
        with file_path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL, lineterminator=os.linesep)
            # QUOTE_MINIMAL 只看 lineterminator 裡的字元，"\n" 行尾時單獨的 "\r" 不會被加引號
            quoted_writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator=os.linesep)
            writer.writerow([self.header])
            for identifier in rows:
                if "\r" in identifier:
                    quoted_writer.writerow([identifier])
                else:
                    writer.writerow([identifier])
        return file_path
