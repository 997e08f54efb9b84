# -----------------------------------------------------------------------------
# Git history collaborator.
#
# Supplies the timeline engine with the revisions of one file:
#   - `list_revisions()`  -> `git log --format=%H%x1f%an%x1f%s -- <path>`
#   - `read_content()`    -> `git show <rev>:<path>`
#   - `load_revisions()`  -> both, materialised as `RevisionRecord`s
#
# Failure policy
# --------------
# Repository-level problems (git not installed, not a repository, `git log`
# failing, timeouts while listing) raise `GitHistoryError` once, so the caller
# can report them at its boundary. Per-revision problems while reading content
# (path absent at that commit, undecodable bytes, a slow `git show`) are logged
# and yield "" so the engine records the revision as "content absent".
#
# Every git invocation goes through `_run()`; tests patch that method instead
# of spawning processes.
# -----------------------------------------------------------------------------
from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from prophistory.core.contracts.revision import RevisionRecord
from prophistory.core.settings import get_logger, load_settings

logger = get_logger(__name__)

_FIELD_SEP = "\x1f"
_LOG_FORMAT = "--format=%H%x1f%an%x1f%s"


class GitHistoryError(RuntimeError):
    """The history of a file could not be obtained from git at all."""


@dataclass(frozen=True, slots=True)
class RevisionInfo:
    """Metadata of one commit touching the tracked file."""

    identifier: str
    author: str
    summary: str


@dataclass(slots=True)
class GitHistory:
    """Read-only access to a file's history in one git repository.

    Parameters
    ----------
    repo_root:
        Top-level directory of the working tree. Relative asset paths are
        interpreted against it.
    git_executable:
        Name or path of the git binary.
    timeout_seconds:
        Upper bound for each git invocation.
    """

    repo_root: Path
    git_executable: str = "git"
    timeout_seconds: float = 30.0

    # --------------------------------------------------------------------- #
    # Constructors
    # --------------------------------------------------------------------- #
    @classmethod
    def discover(cls, start: Path | str | None = None) -> GitHistory:
        """Locate the repository containing ``start`` (default: CWD).

        Git binary and timeout come from :func:`load_settings`.

        Raises
        ------
        GitHistoryError
            If git is unavailable or ``start`` is not inside a work tree.
        """
        cfg = load_settings()
        probe = cls(
            repo_root=Path(start) if start is not None else Path.cwd(),
            git_executable=cfg.git_executable,
            timeout_seconds=cfg.git_timeout,
        )
        if not probe.repo_root.is_dir():
            raise GitHistoryError(f"no such directory: {probe.repo_root}")
        completed = probe._run(["rev-parse", "--show-toplevel"])
        if completed.returncode != 0:
            raise GitHistoryError(
                f"{probe.repo_root} is not inside a git repository: {_stderr(completed)}"
            )
        top = completed.stdout.decode("utf-8", errors="replace").strip()
        return cls(
            repo_root=Path(top),
            git_executable=cfg.git_executable,
            timeout_seconds=cfg.git_timeout,
        )

    # --------------------------------------------------------------------- #
    # Public API
    # --------------------------------------------------------------------- #
    def repo_relative(self, path: Path | str) -> str:
        """Return ``path`` in the repo-relative, forward-slash form git expects."""
        candidate = Path(path)
        if not candidate.is_absolute():
            return candidate.as_posix()
        try:
            relative = candidate.resolve().relative_to(self.repo_root.resolve())
        except ValueError:
            raise GitHistoryError(
                f"{candidate} is outside the repository at {self.repo_root}"
            ) from None
        return relative.as_posix()

    def list_revisions(self, path: str, *, limit: int | None = None) -> list[RevisionInfo]:
        """List the commits touching ``path``, newest first."""
        args = ["log", _LOG_FORMAT]
        if limit is not None:
            args += ["-n", str(limit)]
        args += ["--", path]

        completed = self._run(args)
        if completed.returncode != 0:
            raise GitHistoryError(f"git log failed for {path}: {_stderr(completed)}")

        revisions: list[RevisionInfo] = []
        for line in completed.stdout.decode("utf-8", errors="replace").splitlines():
            if not line.strip():
                continue
            parts = line.split(_FIELD_SEP, 2)
            if len(parts) < 3:
                logger.debug("skipping malformed git log line: %r", line)
                continue
            identifier, author, summary = parts
            revisions.append(RevisionInfo(identifier.strip(), author, summary))
        return revisions

    def read_content(self, identifier: str, path: str) -> str:
        """Return the text of ``path`` at ``identifier``, or ``""`` if unavailable."""
        try:
            completed = self._run(["show", f"{identifier}:{path}"])
        except GitHistoryError as exc:
            logger.warning("could not read %s at %s: %s", path, identifier[:7], exc)
            return ""

        if completed.returncode != 0:
            logger.info("%s absent at %s: %s", path, identifier[:7], _stderr(completed))
            return ""
        try:
            return completed.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            logger.warning("%s at %s is not UTF-8 text: %s", path, identifier[:7], exc)
            return ""

    def load_revisions(self, path: str, *, limit: int | None = None) -> list[RevisionRecord]:
        """Materialise every revision of ``path`` with its full content."""
        return [
            RevisionRecord(
                identifier=info.identifier,
                author=info.author,
                summary=info.summary,
                raw_content=self.read_content(info.identifier, path),
            )
            for info in self.list_revisions(path, limit=limit)
        ]

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #
    def _run(self, args: list[str]) -> subprocess.CompletedProcess[bytes]:
        """Run one git command in the repository and capture its output."""
        command = [self.git_executable, *args]
        logger.debug("running %s", " ".join(command))
        try:
            return subprocess.run(
                command,
                cwd=self.repo_root,
                capture_output=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except FileNotFoundError as exc:
            raise GitHistoryError(f"git executable not found: {self.git_executable}") from exc
        except NotADirectoryError as exc:
            raise GitHistoryError(f"not a directory: {self.repo_root}") from exc
        except subprocess.TimeoutExpired as exc:
            raise GitHistoryError(
                f"git {args[0]} timed out after {self.timeout_seconds:.0f}s"
            ) from exc


def _stderr(completed: subprocess.CompletedProcess[bytes]) -> str:
    return completed.stderr.decode("utf-8", errors="replace").strip() or f"exit {completed.returncode}"


__all__ = ["GitHistory", "GitHistoryError", "RevisionInfo"]
