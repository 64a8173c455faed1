"""Data models for til."""

import re
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from til.errors import DecodeError

# Extension of page files and of every generated file
FILE_EXTENSION = "md"

# Filename-safe timestamp prefix for new pages (GitHub Pages rejects colons)
FILENAME_DATE_FORMAT = "%Y-%m-%dT%H-%M-%S"

# Stand-in for an unparsable creation date
ZERO_TIME = datetime.min.replace(tzinfo=timezone.utc)

FRONTMATTER_OPEN = re.compile(r"\A---[ \t]*\r?\n")
FRONTMATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*\r?(?:\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def slugify(title: str) -> str:
    """Lowercase a title and replace spaces with hyphens."""
    return title.lower().replace(" ", "-")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _quote(value: str) -> str:
    """Wrap a value that ``_unquote`` would otherwise strip."""
    if _unquote(value) == value:
        return value
    if value[0] == '"':
        return f"'{value}'"
    return f'"{value}"'


def _parse_header(header: str, source: str) -> dict[str, str]:
    """Decode ``key: value`` lines. Later keys win over earlier ones."""
    fields: dict[str, str] = {}
    for line in header.splitlines():
        if not line.strip():
            continue
        key, sep, value = line.partition(":")
        if not sep or not key.strip():
            raise DecodeError(f"{source}: malformed front-matter line {line!r}")
        fields[key.strip()] = _unquote(value.strip())
    return fields


class Page(BaseModel):
    """A single dated entry persisted as Markdown with front matter."""

    title: str = ""
    date: str = ""
    tags_raw: str = ""
    file_path: Path = Path()
    body: str = ""

    @classmethod
    def new(cls, title: str, content_dir: Path, now: datetime | None = None) -> "Page":
        """Create a fresh page stamped with the current time.

        The page is not written; see ``FileStorage.create_page``.
        """
        now = now or datetime.now()
        if now.tzinfo is None:
            now = now.astimezone()
        now = now.replace(microsecond=0)
        filename = f"{now.strftime(FILENAME_DATE_FORMAT)}-{slugify(title)}.{FILE_EXTENSION}"
        return cls(title=title, date=now.isoformat(), file_path=Path(content_dir) / filename)

    @classmethod
    def parse(cls, raw: bytes | str, source: str = "<page>") -> "Page":
        """Build a page from the raw contents of a page file.

        A file that does not open with a ``---`` line has no header and
        yields a page without a title. ``file_path`` is left for the caller
        to stamp.

        Raises:
            DecodeError: the bytes are not UTF-8, the header is never
                closed, or a header line is not ``key: value``.
        """
        if isinstance(raw, bytes):
            try:
                text = raw.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DecodeError(f"{source}: invalid character encoding ({e.reason})") from e
        else:
            text = raw
        text = text.removeprefix("\ufeff")

        if not FRONTMATTER_OPEN.match(text):
            return cls(body=text)

        match = FRONTMATTER_PATTERN.match(text)
        if match is None:
            raise DecodeError(f"{source}: missing closing front-matter delimiter")

        fields = _parse_header(match.group(1), source)
        body = text[match.end() :]
        if body.startswith("\r\n"):
            body = body[2:]
        elif body.startswith("\n"):
            body = body[1:]

        return cls(
            title=fields.get("title", ""),
            date=fields.get("date", ""),
            tags_raw=fields.get("tags", ""),
            body=body,
        )

    @property
    def created_at(self) -> datetime:
        """Creation time parsed from ``date``, or ``ZERO_TIME``."""
        try:
            created = datetime.fromisoformat(self.date)
        except ValueError:
            return ZERO_TIME
        # RFC 3339 timestamps always carry an offset
        if created.tzinfo is None:
            return ZERO_TIME
        return created

    @property
    def created_month(self) -> int | None:
        """Month of creation, or None when the date is unknown."""
        created = self.created_at
        if created == ZERO_TIME:
            return None
        return created.month

    @property
    def is_content_page(self) -> bool:
        return self.title != ""

    @property
    def pretty_date(self) -> str:
        created = self.created_at
        return f"{created:%b %d}, {created.year:04d}"

    def front_matter(self) -> str:
        return (
            f"---\ndate: {_quote(self.date)}\ntitle: {_quote(self.title)}\n"
            f"tags: {_quote(self.tags_raw)}\n---\n\n"
        )

    def to_markdown(self) -> str:
        """Render the page file, seeding an H1 heading when there is no body."""
        return self.front_matter() + (self.body or f"# {self.title}\n\n")

    def serialize(self) -> bytes:
        return self.to_markdown().encode("utf-8")

    def link(self) -> str:
        """Markdown list-item link to this page, relative to the content dir."""
        return f"<code>{self.pretty_date}</code> [{self.title}]({self.file_path.name})"

    def tags(self) -> list["Tag"]:
        """One Tag per comma-separated name, empty names included."""
        return [Tag(name=name, pages=[self]) for name in self.tags_raw.split(",")]


class Tag(BaseModel):
    """A tag name and the pages carrying it."""

    name: str
    pages: list[Page] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return value.strip()

    @property
    def is_valid(self) -> bool:
        return self.name != ""

    def add_page(self, page: Page) -> None:
        self.pages.append(page)

    def link(self) -> str:
        """Link to the generated tag page."""
        if not self.is_valid:
            return ""
        return f"[{self.name}](./{self.name})"
