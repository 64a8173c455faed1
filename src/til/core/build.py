"""Site build pipeline: pages in, index and tag pages out."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from til.core.models import Page
from til.core.render import Renderer
from til.core.storage import FileStorage
from til.core.tag_map import TagMap

logger = logging.getLogger(__name__)

INDEX_NAME = "index"


@dataclass
class BuildResult:
    """Summary of one build."""

    page_count: int
    tag_names: list[str]
    written: list[Path] = field(default_factory=list)


class SiteBuilder:
    """Regenerates the index and tag pages of one content directory.

    Every build is a full re-derivation from the page files; nothing is
    cleaned up when a write fails part way through.
    """

    def __init__(
        self,
        storage: FileStorage,
        renderer: Renderer | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.renderer = renderer or Renderer()
        self.clock = clock

    def load_all(self) -> list[Page]:
        return self.storage.load_all()

    async def _write_tag_page(self, tag_name: str, tag_map: TagMap, now: datetime) -> Path:
        content = self.renderer.render_tag_page(tag_name, tag_map, now)
        path = await self.storage.write_document(tag_name, content)
        logger.info("\t-> %s", path)
        return path

    async def _write_tag_pages(self, tag_map: TagMap, now: datetime) -> list[Path]:
        logger.info("-> building tag pages")
        paths = await asyncio.gather(
            *(self._write_tag_page(name, tag_map, now) for name in tag_map.sorted_tag_names())
        )
        return list(paths)

    async def build_tag_pages(self, pages: list[Page], now: datetime | None = None) -> TagMap:
        """Write one page per tag concurrently and wait for all of them."""
        tag_map = TagMap.from_pages(pages)
        await self._write_tag_pages(tag_map, now or self.clock())
        return tag_map

    async def build_index_page(
        self, pages: list[Page], tag_map: TagMap, now: datetime | None = None
    ) -> Path:
        logger.info("-> building index page")
        now = now or self.clock()
        content = self.renderer.render_index_page(pages, tag_map, now)
        path = await self.storage.write_document(INDEX_NAME, content)
        logger.info("\t-> %s", path)
        return path

    async def build(self) -> BuildResult:
        """Load pages, write every tag page, then write the index."""
        now = self.clock()
        pages = self.load_all()
        tag_map = TagMap.from_pages(pages)
        tag_paths = await self._write_tag_pages(tag_map, now)
        index_path = await self.build_index_page(pages, tag_map, now)
        return BuildResult(
            page_count=sum(1 for page in pages if page.is_content_page),
            tag_names=tag_map.sorted_tag_names(),
            written=[*tag_paths, index_path],
        )
