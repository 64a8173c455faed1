"""Target directory resolution.

Target directories are configured as a map of alias to directory::

    targetDirectories:
      a: ~/Documents/blog
      b: ~/Documents/notes

The configured directory is the repository root that gets committed and
pushed. Pages and generated files live in its ``docs`` subdirectory.
"""

import logging
from collections.abc import Mapping
from pathlib import Path

from til.errors import AmbiguousTargetError, UndefinedTargetError, WriteError

logger = logging.getLogger(__name__)

PAGES_SUBDIR = "docs"


def resolve_target_dir(
    target_dirs: Mapping[str, str],
    selector: str | None = None,
    with_pages_subdir: bool = True,
) -> Path:
    """Pick the directory to operate on.

    Args:
        target_dirs: Configured alias to directory map.
        selector: Alias chosen with ``-t``. Ignored when only one
            directory is configured.
        with_pages_subdir: Append the ``docs`` content subdirectory.

    Raises:
        AmbiguousTargetError: Several directories and no selector.
        UndefinedTargetError: The selected alias is missing or empty.
    """
    if len(target_dirs) == 1:
        target = next(iter(target_dirs.values()))
    elif not target_dirs:
        raise UndefinedTargetError()
    elif not selector:
        raise AmbiguousTargetError()
    else:
        target = target_dirs.get(selector, "")

    if not target:
        raise UndefinedTargetError()

    if target.startswith("~"):
        path = Path.home() / target[1:].lstrip("/")
    else:
        path = Path(target)

    if with_pages_subdir:
        path = path / PAGES_SUBDIR
    return path


def ensure_target_dir(target_dirs: Mapping[str, str], selector: str | None = None) -> Path:
    """Resolve the content directory and create it if it doesn't exist."""
    path = resolve_target_dir(target_dirs, selector, with_pages_subdir=True)
    if not path.exists():
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise WriteError(f"could not create the target directories: {e}") from e
        logger.info("\t-> created %s", path)
    return path


def list_target_dirs(target_dirs: Mapping[str, str]) -> list[tuple[str, str]]:
    """Alias and directory pairs, sorted by alias."""
    return sorted(target_dirs.items())
