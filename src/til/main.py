"""til command line: create pages, build the site, save and push."""

import asyncio
import logging
from pathlib import Path

import click

from til.config import DEFAULT_COMMIT_MESSAGE, Settings, load_settings
from til.core import vcs
from til.core.build import SiteBuilder
from til.core.editor import open_in_editor, resolve_editor
from til.core.render import Renderer
from til.core.storage import FileStorage
from til.core.targets import ensure_target_dir, list_target_dirs, resolve_target_dir
from til.errors import BlankTitleError, TilError

logger = logging.getLogger("til")


class ClickEchoHandler(logging.Handler):
    """Send log records through click so colours are dropped off a tty."""

    colours = {logging.WARNING: "yellow", logging.ERROR: "red"}

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            colour = self.colours.get(record.levelno)
            click.echo(click.style(message, fg=colour) if colour else message)
        except Exception:
            self.handleError(record)


def configure_logging(verbose: bool = False) -> None:
    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False


def _is_word_separator(char: str) -> bool:
    # ASCII letters, digits and underscore continue a word; so does any
    # other letter or digit. Remaining ASCII characters and whitespace split.
    if char.isascii():
        return not (char.isalnum() or char == "_")
    if char.isalpha() or char.isdigit():
        return False
    return char.isspace()


def parse_title(words: tuple[str, ...]) -> str:
    """Join the title words, upper-casing every letter that starts a word.

    Punctuation starts a new word, so "zombie-apocalypse" becomes
    "Zombie-Apocalypse".
    """
    title = []
    previous = " "
    for char in " ".join(words):
        title.append(char.upper() if _is_word_separator(previous) else char)
        previous = char
    return "".join(title)


def determine_commit_message(settings: Settings, words: tuple[str, ...]) -> str:
    """Commit message precedence: trailing words, config, built-in default."""
    if words:
        return " ".join(words)
    return settings.commit_message or DEFAULT_COMMIT_MESSAGE


def build_content(settings: Settings, target: str) -> None:
    content_dir = resolve_target_dir(settings.target_directories, target, with_pages_subdir=True)
    builder = SiteBuilder(FileStorage(content_dir), Renderer(settings.attribution))
    result = asyncio.run(builder.build())
    logger.debug("Built %d pages and %d tags", result.page_count, len(result.tag_names))


def save_and_push(settings: Settings, target: str, message: str) -> None:
    repo_dir = resolve_target_dir(settings.target_directories, target, with_pages_subdir=False)
    logger.info("-> saving uncommitted files")
    vcs.save(repo_dir, message, settings.committer_name, settings.committer_email)
    logger.info("-> pushing to remote")
    vcs.push(repo_dir)


def create_new_page(settings: Settings, target: str, title: str) -> Path:
    if not title:
        raise BlankTitleError()
    content_dir = ensure_target_dir(settings.target_directories, target)
    page = FileStorage(content_dir).create_page(title)
    open_in_editor(page.file_path, resolve_editor(settings.editor))
    logger.info("-> %s", page.file_path)
    return page.file_path


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-b", "--build", "build_flag", is_flag=True, help="Build the index and tag pages.")
@click.option("-l", "--list", "list_flag", is_flag=True, help="List the configured target directories.")
@click.option("-s", "--save", "save_flag", is_flag=True, help="Build, save, and push.")
@click.option("-t", "--target", default="", help="Target directory key.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Use this config file instead of the default location.",
)
@click.argument("words", nargs=-1)
def cli(
    build_flag: bool,
    list_flag: bool,
    save_flag: bool,
    target: str,
    verbose: bool,
    config_path: Path | None,
    words: tuple[str, ...],
) -> None:
    """Create a new page titled WORDS, or build and publish the site.

    With --save, WORDS is used as the commit message instead.
    """
    configure_logging(verbose)
    try:
        settings = load_settings(config_path)

        if list_flag:
            for key, directory in list_target_dirs(settings.target_directories):
                logger.info("-> %6s\t%s", key, directory)
        elif build_flag:
            build_content(settings, target)
        elif save_flag:
            message = determine_commit_message(settings, words)
            build_content(settings, target)
            save_and_push(settings, target, message)
        else:
            create_new_page(settings, target, parse_title(words))
    except TilError as e:
        raise click.ClickException(str(e)) from e

    logger.info("✓ done")
