"""Git operations for fetching the skills repository."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from git import Repo
from git.exc import GitCommandError, GitCommandNotFound, InvalidGitRepositoryError

from oracle_skills.config import DEFAULT_REPOSITORY, DEFAULT_SKILLS_PATH
from oracle_skills.types import OracleSkillsError

if TYPE_CHECKING:
    from oracle_skills.context import RunContext

logger = logging.getLogger(__name__)

GIT_ERRORS = (GitCommandError, GitCommandNotFound, InvalidGitRepositoryError, OSError)


class FetchError(OracleSkillsError):
    """Both the sparse and the full clone failed."""

    pass


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a single clone attempt.

    Attributes:
        ok: True if the attempt produced a checkout.
        path: Checkout path on success.
        error: Error message on failure.
    """

    ok: bool
    path: Path | None = None
    error: str | None = None

    @classmethod
    def success(cls, path: Path) -> FetchOutcome:
        return cls(ok=True, path=path)

    @classmethod
    def failure(cls, error: str) -> FetchOutcome:
        return cls(ok=False, error=error)


class GitOps:
    """Fetches temporary checkouts of the skills repository."""

    def __init__(
        self,
        repository: str = DEFAULT_REPOSITORY,
        skills_path: str = DEFAULT_SKILLS_PATH,
    ) -> None:
        """Initialize git operations.

        Args:
            repository: Git URL of the skills repository.
            skills_path: Repository subpath holding the skill folders.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.repository = repository
        self.skills_path = skills_path

    @classmethod
    def create(cls, repository: str, skills_path: str) -> GitOps:
        """Create a fetcher for a specific repository.

        Args:
            repository: Git URL of the skills repository.
            skills_path: Repository subpath holding the skill folders.

        Returns:
            Configured GitOps instance.
        """
        return cls(repository=repository, skills_path=skills_path)

    @classmethod
    def create_default(cls) -> GitOps:
        """Create a fetcher for the default Oracle skills repository."""
        return cls()

    def fetch_repository(self, run: RunContext) -> Path:
        """Clone the repository into the run's checkout path.

        Tries a shallow, blob-filtered sparse clone limited to the skills
        path. If that fails, retries once with a plain shallow clone into
        the same directory.

        Args:
            run: Invocation context owning the checkout path.

        Returns:
            Path to the local checkout.

        Raises:
            FetchError: If the checkout directory cannot be created or both
                attempts fail.
        """
        path = run.checkout_path
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FetchError(f"Cannot create checkout directory {path.parent}: {e}") from e

        sparse = self._try_sparse_clone(path)
        if sparse.ok and sparse.path is not None:
            return sparse.path

        logger.warning("Sparse clone failed, trying full clone: %s", sparse.error)
        self._cleanup_failed_clone(path)

        full = self._try_full_clone(path)
        if full.ok and full.path is not None:
            return full.path

        self._cleanup_failed_clone(path)
        raise FetchError(
            f"Could not clone {self.repository}: "
            f"sparse clone failed ({sparse.error}); full clone failed ({full.error})"
        )

    def _try_sparse_clone(self, path: Path) -> FetchOutcome:
        """Attempt a sparse, blob-filtered shallow clone.

        Args:
            path: Target directory.

        Returns:
            Outcome of the attempt.
        """
        try:
            repo = Repo.clone_from(
                self.repository, path, depth=1, filter="blob:none", sparse=True
            )
            repo.git.sparse_checkout("set", self.skills_path)
        except GIT_ERRORS as e:
            logger.debug("Sparse clone of %s failed: %s", self.repository, e)
            return FetchOutcome.failure(str(e))
        logger.debug("Sparse clone of %s succeeded", self.repository)
        return FetchOutcome.success(path)

    def _try_full_clone(self, path: Path) -> FetchOutcome:
        """Attempt a plain shallow clone.

        Args:
            path: Target directory.

        Returns:
            Outcome of the attempt.
        """
        try:
            Repo.clone_from(self.repository, path, depth=1)
        except GIT_ERRORS as e:
            logger.debug("Full clone of %s failed: %s", self.repository, e)
            return FetchOutcome.failure(str(e))
        logger.debug("Full clone of %s succeeded", self.repository)
        return FetchOutcome.success(path)

    def _cleanup_failed_clone(self, path: Path) -> None:
        """Remove a partial clone directory after a failed attempt."""
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.warning("Could not remove partial clone %s: %s", path, e)

    def release(self, path: Path) -> None:
        """Remove a checkout directory.

        Failures are logged as warnings naming the leftover directory and
        are otherwise ignored, so cleanup never masks the outcome of the
        command that ran before it.

        Args:
            path: Checkout to remove.
        """
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.warning("Could not remove checkout %s: %s", path, e)

    @contextmanager
    def checkout(self, run: RunContext) -> Iterator[Path]:
        """Fetch the repository and always release it afterwards.

        Args:
            run: Invocation context owning the checkout path.

        Yields:
            Path to the local checkout.
        """
        try:
            yield self.fetch_repository(run)
        finally:
            self.release(run.checkout_path)
