"""Abstract interface for browsing source repositories."""

from typing import Protocol

from ..models.search import CodeSearchHit


class RepositoryBrowser(Protocol):
    """Abstract interface for reading files from a hosted repository.

    This protocol defines the contract that repository adapters
    (GitHub, GitLab, etc.) must implement for the file finder.
    """

    async def search_code(
        self,
        owner: str,
        repo: str,
        query: str,
    ) -> list[CodeSearchHit]:
        """
        Search repository code.

        Args:
            owner: Repository owner
            repo: Repository name
            query: Search query string

        Returns:
            Files containing matches, with the matched lines
        """
        ...

    async def get_repo_tree(
        self,
        owner: str,
        repo: str,
        branch: str | None = None,
    ) -> list[str]:
        """
        List file paths in the repository.

        Args:
            owner: Repository owner
            repo: Repository name
            branch: Branch name (default: default branch)

        Returns:
            File paths relative to the repository root
        """
        ...

    async def get_file_content(
        self,
        owner: str,
        repo: str,
        path: str,
        branch: str | None = None,
    ) -> str | None:
        """
        Fetch content of a file from the repository.

        Args:
            owner: Repository owner
            repo: Repository name
            path: Path to file within repository
            branch: Branch name (default: default branch)

        Returns:
            File contents as string, None if file doesn't exist
        """
        ...
