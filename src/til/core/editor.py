"""Opening pages in the user's editor."""

import os
import shlex
import subprocess
from pathlib import Path

from til.errors import EditorError

DEFAULT_EDITOR = "open"


def resolve_editor(editor: str = "") -> list[str]:
    """Editor command: configured value, then $EDITOR, then the OS opener.

    Blank candidates are skipped.
    """
    for candidate in (editor, os.environ.get("EDITOR", "")):
        try:
            command = shlex.split(candidate)
        except ValueError as e:
            raise EditorError(f"could not parse editor command {candidate!r}: {e}") from e
        if command:
            return command
    return [DEFAULT_EDITOR]


def open_in_editor(path: Path, command: list[str]) -> None:
    """Run the editor on ``path`` and wait for it to exit."""
    if not command:
        raise EditorError("no editor command configured")
    try:
        subprocess.run([*command, str(path)], check=True)
    except FileNotFoundError as e:
        raise EditorError(f"editor not found: {command[0]}") from e
    except subprocess.CalledProcessError as e:
        raise EditorError(f"editor exited with status {e.returncode}") from e
    except OSError as e:
        raise EditorError(f"could not run editor {command[0]}: {e.strerror or e}") from e
