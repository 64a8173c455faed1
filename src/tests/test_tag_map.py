"""Unit tests for TagMap."""

import random

from til.core.models import Page, Tag
from til.core.tag_map import TagMap


def make_page(title: str, date: str = "", tags: str = "") -> Page:
    return Page(title=title, date=date, tags_raw=tags)


class TestBuild:
    def test_with_no_pages(self):
        assert len(TagMap.from_pages([])) == 0

    def test_with_pages_without_tags(self):
        assert len(TagMap.from_pages([make_page("a"), make_page("b")])) == 0

    def test_keys_are_trimmed_distinct_names(self):
        tag_map = TagMap.from_pages([make_page("a", tags="go, ada"), make_page("b", tags="ada,go ,")])
        assert set(tag_map.tags) == {"ada", "go"}
        assert len(tag_map) == 2

    def test_every_key_has_tags(self):
        tag_map = TagMap.from_pages([make_page("a", tags="go"), make_page("b", tags="go, ada")])
        assert all(tag_map.tags[name] for name in tag_map.tags)
        assert len(tag_map.get("go")) == 2

    def test_invalid_tags_are_skipped(self):
        tag_map = TagMap()
        tag_map.add(Tag(name=" "))
        assert len(tag_map) == 0
        assert "" not in tag_map

    def test_get_missing(self):
        assert TagMap().get("nope") == []


class TestSortedTagNames:
    def test_ascending(self):
        tag_map = TagMap.from_pages([make_page("a", tags="zombies, ada, go"), make_page("b", tags="go")])
        assert tag_map.sorted_tag_names() == ["ada", "go", "zombies"]

    def test_sorted_without_duplicates_for_any_input(self):
        rng = random.Random(7)
        names = ["go", "ada", "rust", "c", "zig", "Go"]
        pages = [make_page(str(i), tags=", ".join(rng.choices(names, k=4))) for i in range(30)]
        result = TagMap.from_pages(pages).sorted_tag_names()
        assert result == sorted(result)
        assert len(result) == len(set(result))


class TestPagesFor:
    def test_most_recent_first(self):
        old = make_page("old", "2019-01-01T00:00:00Z", "go")
        new = make_page("new", "2021-01-01T00:00:00Z", "go")
        mid = make_page("mid", "2020-01-01T00:00:00Z", "go")
        tag_map = TagMap.from_pages([old, new, mid])
        assert [p.title for p in tag_map.pages_for("go")] == ["new", "mid", "old"]

    def test_non_increasing_across_offsets(self):
        pages = [
            make_page("a", "2020-05-07T13:13:08-07:00", "go"),
            make_page("b", "2020-05-07T21:00:00+00:00", "go"),
            make_page("c", "2020-05-07T19:00:00+00:00", "go"),
        ]
        result = TagMap.from_pages(pages).pages_for("go")
        dates = [p.created_at for p in result]
        assert dates == sorted(dates, reverse=True)
        assert [p.title for p in result] == ["b", "a", "c"]

    def test_identical_timestamps_keep_all(self):
        pages = [make_page(str(i), "2020-05-07T13:13:08Z", "go") for i in range(5)]
        assert len(TagMap.from_pages(pages).pages_for("go")) == 5

    def test_zero_dates_sort_last(self):
        pages = [make_page("undated", "", "go"), make_page("dated", "2020-05-07T13:13:08Z", "go")]
        assert [p.title for p in TagMap.from_pages(pages).pages_for("go")] == ["dated", "undated"]

    def test_only_pages_with_that_tag(self):
        tag_map = TagMap.from_pages([make_page("a", tags="go"), make_page("b", tags="ada")])
        assert [p.title for p in tag_map.pages_for("ada")] == ["b"]

    def test_missing_name_is_empty(self):
        assert TagMap.from_pages([make_page("a", tags="go")]).pages_for("rust") == []
