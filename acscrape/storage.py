"""On-disk store for rendered page sources."""

from pathlib import Path
from typing import Iterator, List, Union

from acscrape.logging_config import get_logger
from acscrape.models import PageCapture
from acscrape.naming import url_to_html_file_name

__all__ = ["PageStore"]

logger = get_logger("storage")


class PageStore:
    """Saves page captures as files under a root directory and lists them later.

    Files are written once per crawl and never deleted. Saving the same URL
    again replaces the previous capture.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def capture(self, url: str, source: bytes) -> PageCapture:
        """Build a capture for ``url``.

        Raises:
            NamingError: If no file name can be derived from the URL
        """
        return PageCapture(
            source_url=url,
            file_name=url_to_html_file_name(url),
            raw_bytes=source,
        )

    def save(self, capture: PageCapture) -> Path:
        """Write a capture to disk and return its path."""
        path = self.root / capture.file_name
        path.write_bytes(capture.raw_bytes)
        logger.debug(f"Wrote {len(capture.raw_bytes)} bytes to {path}")
        return path

    def paths(self) -> List[Path]:
        """Return all capture files, sorted by name.

        Raises:
            NotADirectoryError: If the root is missing or not a directory
        """
        if not self.root.is_dir():
            raise NotADirectoryError(f"{self.root} is not a directory or does not exist")
        return sorted(p for p in self.root.iterdir() if p.is_file())

    def read(self, path: Union[str, Path]) -> bytes:
        return Path(path).read_bytes()

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths())

    def __len__(self) -> int:
        return len(self.paths())
