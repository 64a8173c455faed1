"""Tag name to pages index."""

from collections.abc import Iterable

from til.core.models import Page, Tag


class TagMap:
    """Maps each tag name to the Tag instances carrying it.

    Every key holds a non-empty list; invalid (empty-name) tags are never
    added. Built once per build from the loaded pages and only read after.
    """

    def __init__(self) -> None:
        self.tags: dict[str, list[Tag]] = {}

    @classmethod
    def from_pages(cls, pages: Iterable[Page]) -> "TagMap":
        tag_map = cls()
        tag_map.build_from_pages(pages)
        return tag_map

    def add(self, tag: Tag) -> None:
        if not tag.is_valid:
            return
        self.tags.setdefault(tag.name, []).append(tag)

    def build_from_pages(self, pages: Iterable[Page]) -> None:
        for page in pages:
            for tag in page.tags():
                self.add(tag)

    def get(self, name: str) -> list[Tag]:
        return self.tags.get(name, [])

    def __len__(self) -> int:
        return len(self.tags)

    def __contains__(self, name: object) -> bool:
        return name in self.tags

    def sorted_tag_names(self) -> list[str]:
        """Tag names in ascending lexicographic order."""
        return sorted(self.tags)

    def pages_for(self, name: str) -> list[Page]:
        """All pages tagged ``name``, most recently created first."""
        pages = [page for tag in self.get(name) for page in tag.pages]
        return sorted(pages, key=lambda p: p.created_at, reverse=True)
