from __future__ import annotations

from itertools import islice

from github import Auth, Github

# GitHub's maximum page size for the commits endpoint.
MAX_PAGE_SIZE = 100


def get_client(token: str, page_size: int = MAX_PAGE_SIZE) -> Github:
    return Github(auth=Auth.Token(token), per_page=page_size)


def get_repo(client: Github, repo_name: str):
    return client.get_repo(repo_name)


def set_page_size(client: Github, count: int) -> None:
    """Size the next listing's pages to ``count`` so one request returns the whole window."""
    client.per_page = max(1, min(count, MAX_PAGE_SIZE))


def list_commits(repo, branch: str, count: int, path: str | None = None) -> list:
    """Return the newest ``count`` commits on ``branch``, optionally touching ``path``.

    Only the first page is ever requested as long as ``count`` does not
    exceed the client's page size.
    """
    kwargs = {"sha": branch}
    if path:
        kwargs["path"] = path
    return list(islice(repo.get_commits(**kwargs), count))
