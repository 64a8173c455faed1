"""File storage for pages and generated documents."""

import asyncio
import logging
from datetime import datetime
from pathlib import Path

from til.core.models import FILE_EXTENSION, Page
from til.errors import ReadError, WriteError

logger = logging.getLogger(__name__)


class FileStorage:
    """Pages stored as Markdown files with front matter in one directory.

    File naming: ``2020-05-07T13-13-08-page-title.md`` for pages, and
    ``index.md`` or ``<tag>.md`` for generated documents.
    """

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)

    def path_for(self, name: str) -> Path:
        """Path of a generated document such as ``index``."""
        return self.base_path / f"{name}.{FILE_EXTENSION}"

    def list_page_paths(self) -> list[Path]:
        """Markdown files directly under the directory, newest name first."""
        paths = self.base_path.glob(f"*.{FILE_EXTENSION}")
        return sorted((p for p in paths if p.is_file()), key=lambda p: p.name, reverse=True)

    def read_page(self, path: Path) -> Page:
        """Parse a page file. Read and decode errors are fatal."""
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise ReadError(f"could not read {path}: {e}") from e
        page = Page.parse(raw, source=str(path))
        page.file_path = path
        return page

    def load_all(self) -> list[Page]:
        """Parse every page file in reverse lexicographic filename order.

        Filenames start with a timestamp, so this is reverse-chronological.
        Generated index and tag files are loaded too; they carry no front
        matter and come back as pages without a title.
        """
        pages = [self.read_page(path) for path in self.list_page_paths()]
        logger.debug("Loaded %d pages from %s", len(pages), self.base_path)
        return pages

    def save_page(self, page: Page) -> Path:
        """Write a page file to its own ``file_path``."""
        try:
            page.file_path.write_bytes(page.serialize())
        except OSError as e:
            raise WriteError(f"could not write {page.file_path}: {e}") from e
        return page.file_path

    def create_page(self, title: str, now: datetime | None = None) -> Page:
        """Create and write a fresh page for ``title``."""
        page = Page.new(title, self.base_path, now=now)
        self.save_page(page)
        logger.debug("Created page %s", page.file_path)
        return page

    async def write_document(self, name: str, content: str) -> Path:
        """Write a generated document such as ``index`` or a tag page."""
        path = self.path_for(name)
        try:
            await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"could not write {path}: {e}") from e
        return path
