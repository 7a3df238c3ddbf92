"""Rank the contributors of a commit range."""

from urllib.parse import urlencode

from .client import ContribClient
from .models import API_BASE, GREENKEEPER_LOGIN, PER_PAGE, ContributorEntry, FetchRequest
from .pagination import get_pagination
from .settings import get_settings


def _is_counted(commit: dict, remove_greenkeeper: bool) -> bool:
    # Exactly one parent: skips merges as well as root commits
    if len(commit.get("parents") or []) != 1 or not commit.get("author"):
        return False
    if not commit["author"].get("login"):
        return False
    if remove_greenkeeper:
        return commit["author"].get("login") != GREENKEEPER_LOGIN
    return True


def get_contrib_list(commits: list[dict], remove_greenkeeper: bool = False) -> list[ContributorEntry]:
    """Count commits per author, most active first.

    The id is the account login while the name comes from the git author
    name, so the two can differ. Equal counts keep first-seen order.
    """
    by_id: dict[str, ContributorEntry] = {}
    for commit in commits:
        if not _is_counted(commit, remove_greenkeeper):
            continue
        login = commit["author"]["login"]
        if login in by_id:
            by_id[login].commit_count += 1
        else:
            name = ((commit.get("commit") or {}).get("author") or {}).get("name")
            by_id[login] = ContributorEntry(id=login, name=name, commit_count=1)

    return sorted(by_id.values(), key=lambda c: c.commit_count, reverse=True)


def commits_url(user: str, repo: str, to: str | None = None) -> str:
    params = {"page": 1, "per_page": PER_PAGE}
    if to:
        params["sha"] = to
    return f"{API_BASE}/repos/{user}/{repo}/commits?{urlencode(params)}"


def get_contributors(
    user: str,
    repo: str,
    commit: str,
    *,
    oauth_key: str | None = None,
    to: str | None = None,
    retry: bool = False,
    remove_greenkeeper: bool = False,
    client: ContribClient | None = None,
) -> list[ContributorEntry]:
    """Fetch commits of ``user/repo`` back to ``commit`` and rank their authors.

    Args:
        user: GitHub user or organization, also sent as the user agent unless
            USER_AGENT is configured
        repo: Repository name
        commit: SHA of the oldest commit to include
        oauth_key: Token sent as ``Authorization: token <key>``
        to: Branch or SHA to start listing from (defaults to the default branch)
        retry: Retry while GitHub answers 202
        remove_greenkeeper: Drop commits authored by the greenkeeper bot
        client: Client to reuse; a new one is created and closed otherwise
    """
    if not (user and repo and commit):
        raise ValueError("Must specify a github user, repo, and commit SHA")

    request = FetchRequest(
        url=commits_url(user, repo, to),
        user_agent=get_settings().user_agent or user,
        oauth_key=oauth_key,
        retry=retry,
    )

    if client is not None:
        commits = get_pagination(client, request, commit)
    else:
        with ContribClient() as own_client:
            commits = get_pagination(own_client, request, commit)

    return get_contrib_list(commits, remove_greenkeeper)
