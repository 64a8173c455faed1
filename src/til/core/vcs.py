"""Saving and pushing the target repository."""

import logging
from pathlib import Path

import git

from til.errors import VcsError

logger = logging.getLogger(__name__)


def _open_repo(repo_dir: Path) -> git.Repo:
    try:
        return git.Repo(repo_dir)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise VcsError(f"not a git repository: {repo_dir}") from e


def save(repo_dir: Path, message: str, author_name: str, author_email: str) -> str:
    """Stage the whole working tree and commit it.

    Returns:
        The hexsha of the new commit.
    """
    repo = _open_repo(repo_dir)
    author = git.Actor(author_name, author_email)
    try:
        repo.git.add(A=True)
        commit = repo.index.commit(message, author=author, committer=author)
    except git.exc.GitCommandError as e:
        raise VcsError(f"could not commit {repo_dir}: {e}") from e
    logger.info("-> committed with '%s' (%.7s)", commit.message, commit.hexsha)
    return commit.hexsha


def push(repo_dir: Path) -> None:
    """Push the active branch to its tracking remote, or ``origin``."""
    repo = _open_repo(repo_dir)
    try:
        branch = repo.active_branch
    except TypeError as e:
        raise VcsError(f"cannot push a detached HEAD in {repo_dir}") from e

    tracking = branch.tracking_branch()
    remote_name = tracking.remote_name if tracking is not None else "origin"
    try:
        remote = repo.remote(remote_name)
        remote.push(branch.name).raise_if_error()
    except (ValueError, git.exc.GitCommandError) as e:
        raise VcsError(f"could not push to {remote_name}: {e}") from e
