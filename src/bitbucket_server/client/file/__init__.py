"""Bitbucket Server file API: raw content, browsing, updates and listings."""

import logging
from urllib.parse import quote

from ..decoding import decode_response
from ..decoding import is_success
from ..domain import Commit
from ..domain import Error
from ..domain import FilesPage
from ..domain import LastModified
from ..domain import LinePage
from ..domain import RawContent
from ..lib.utils import TEXT_ACCEPT
from ..lib.utils import build_form
from ..lib.utils import build_params
from ..lib.utils import join_path
from ..lib.utils import quote_path

logger = logging.getLogger(__name__)

RAW_CONTENT_ERROR = "Failed retrieving raw content"


def repo_path(project: str, repo: str) -> str:
    return f"projects/{quote(project, safe='')}/repos/{quote(repo, safe='')}"


class FileApi:
    """
    File operations on a single Bitbucket Server.

    Every method returns a result object. Failed requests are reported through
    the result's `errors` list instead of raising.
    """

    def __init__(self, api):
        self.api = api

    async def raw(self, project: str, repo: str, file_path: str, at: str | None = None) -> RawContent:
        """
        Retrieve the raw content of a file.

        Args:
            project: Project key
            repo: Repository slug
            file_path: Path of the file in the repository
            at: Optional branch, tag or commit

        Returns:
            RawContent with the file text, or a single error when the file could not be read
        """
        url = self.api.build_url(f"{repo_path(project, repo)}/raw/{quote_path(file_path)}")
        status, body = await self.api.request("GET", url, params=build_params(at=at), accept=TEXT_ACCEPT)
        if not is_success(status):
            # failure bodies are HTML pages, nothing to parse
            logger.warning(f"raw content for {project}/{repo}/{file_path} failed with status {status}")
            return RawContent(errors=[Error(message=RAW_CONTENT_ERROR)])
        return RawContent(value=body)

    async def list_lines(
        self,
        project: str,
        repo: str,
        file_path: str,
        at: str | None = None,
        type_only: bool | None = None,
        blame: bool | None = None,
        no_content: bool | None = None,
        start: int | None = None,
        limit: int | None = None,
        since: str | None = None,
        until: str | None = None,
    ) -> LinePage:
        """
        Browse the lines of a file.

        Args:
            project: Project key
            repo: Repository slug
            file_path: Path of the file in the repository
            at: Optional branch, tag or commit
            type_only: Only return the type of the path
            blame: Include blame information for the returned lines
            no_content: Skip line content (useful together with blame)
            start: Index of the first line to return
            limit: Maximum number of lines to return
            since: Optional commit to compare from
            until: Optional commit to compare to

        Returns:
            LinePage with the lines and, when requested, blame keyed by line number
        """
        url = self.api.rest_url(f"{repo_path(project, repo)}/browse/{quote_path(file_path)}")
        params = build_params(
            at=at,
            type=type_only,
            blame=blame,
            noContent=no_content,
            start=start,
            limit=limit,
            since=since,
            until=until,
        )
        status, body = await self.api.request("GET", url, params=params)
        return decode_response(LinePage, status, body)

    async def update_content(
        self,
        project: str,
        repo: str,
        file_path: str,
        branch: str,
        content: str,
        commit_message: str | None = None,
        source_commit_id: str | None = None,
        source_branch: str | None = None,
    ) -> Commit:
        """
        Commit new content for a file.

        Args:
            project: Project key
            repo: Repository slug
            file_path: Path of the file in the repository
            branch: Branch to commit to
            content: New file content
            commit_message: Optional commit message
            source_commit_id: Commit the edit is based on, required when updating an existing file
            source_branch: Branch to create `branch` from when it does not exist yet

        Returns:
            The created Commit, or a Commit holding only errors
        """
        url = self.api.rest_url(f"{repo_path(project, repo)}/browse/{quote_path(file_path)}")
        form = build_form(
            {
                "branch": branch,
                "content": content,
                "message": commit_message,
                "sourceCommitId": source_commit_id,
                "sourceBranch": source_branch,
            }
        )
        logger.info(f"updating {project}/{repo}/{file_path} on {branch}")
        status, body = await self.api.request("PUT", url, data=form)
        return decode_response(Commit, status, body)

    async def list_files(
        self,
        project: str,
        repo: str,
        directory_path: str | None = None,
        at: str | None = None,
        start: int | None = None,
        limit: int | None = None,
    ) -> FilesPage:
        """
        List file paths in a repository, optionally below a directory.

        Args:
            project: Project key
            repo: Repository slug
            directory_path: Optional directory to list
            at: Optional branch, tag or commit
            start: Index of the first path to return
            limit: Maximum number of paths to return

        Returns:
            FilesPage with the file paths
        """
        url = self.api.rest_url(join_path(f"{repo_path(project, repo)}/files", directory_path))
        params = build_params(at=at, start=start, limit=limit)
        status, body = await self.api.request("GET", url, params=params)
        return decode_response(FilesPage, status, body)

    async def last_modified(self, project: str, repo: str, path: str | None, at: str) -> LastModified:
        """
        Summarize the latest commit touching each file.

        Args:
            project: Project key
            repo: Repository slug
            path: Optional directory; None, "" and "/" all mean the repository root
            at: Branch, tag or commit to summarize

        Returns:
            LastModified with the latest commit and a per-file commit mapping

        Raises:
            ValueError: If `at` is empty
        """
        if not at:
            raise ValueError("last_modified requires a ref for 'at'")
        url = self.api.rest_url(join_path(f"{repo_path(project, repo)}/last-modified", path))
        status, body = await self.api.request("GET", url, params=build_params(at=at))
        return decode_response(LastModified, status, body)
