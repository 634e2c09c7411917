"""Load the baseline: the translation file as it was at a git revision."""

import logging
from pathlib import Path

import git

from traduora_sync.loaders.errors import SnapshotError
from traduora_sync.loaders.local import parse_translation_json
from traduora_sync.sync.records import BaselineRecord

logger = logging.getLogger(__name__)


def _open_repo(repo_path: str | Path) -> git.Repo:
    try:
        return git.Repo(repo_path, search_parent_directories=True)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise SnapshotError(f"Invalid git repository at {repo_path}: {e}") from e


def _path_in_repo(repo: git.Repo, file_path: str | Path) -> str:
    """Express ``file_path`` relative to the repository root, in git's notation."""
    if repo.working_tree_dir is None:
        raise SnapshotError(f"Repository at {repo.git_dir} is bare, it has no working tree")
    root = Path(repo.working_tree_dir).resolve()
    target = Path(file_path).resolve()
    try:
        return target.relative_to(root).as_posix()
    except ValueError as e:
        raise SnapshotError(f"{file_path} is not inside the repository at {root}") from e


def load_baseline(
    repo_path: str | Path,
    revision: str,
    file_path: str | Path,
) -> list[BaselineRecord]:
    """Read ``file_path`` as committed at ``revision``.

    Raises:
        SnapshotError: the repository, revision or file cannot be found, or
            the historical content does not parse.
    """
    repo = _open_repo(repo_path)
    rel_path = _path_in_repo(repo, file_path)

    try:
        commit = repo.commit(revision)
    except (git.exc.BadName, ValueError) as e:
        raise SnapshotError(f"Unknown revision {revision!r}: {e}") from e

    try:
        blob = commit.tree / rel_path
    except KeyError as e:
        raise SnapshotError(f"{rel_path} does not exist at revision {revision}") from e

    records = parse_translation_json(
        blob.data_stream.read(), f"{rel_path}@{revision}"
    )
    logger.info(
        "Loaded %d baseline terms from %s at %s (%s)",
        len(records), rel_path, revision, commit.hexsha[:10],
    )
    return records
