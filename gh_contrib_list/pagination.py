"""Walk paginated commit listings until a boundary commit."""

import logging
from collections.abc import Iterator
from dataclasses import replace

from .client import ContribClient
from .models import FetchRequest, Page

logger = logging.getLogger(__name__)


def iter_pages(client: ContribClient, request: FetchRequest) -> Iterator[Page]:
    """Yield pages in order, following each page's next link.

    The next page is only requested once the previous one (retries included)
    has been consumed.
    """
    while True:
        page = client.fetch_page(request)
        yield page
        if not page.next_page_url:
            return
        request = replace(request, url=page.next_page_url, attempt=0)


def get_pagination(client: ContribClient, request: FetchRequest, commit: str) -> list[dict]:
    """Collect commits from every page up to and including ``commit``.

    If the boundary never shows up, all commits are returned. Errors abort
    the whole walk.
    """
    commits: list[dict] = []
    for page_num, page in enumerate(iter_pages(client, request), start=1):
        records = page.records
        index = _index_of_sha(records, commit)
        logger.debug("Page %d: %d commits", page_num, len(records))
        if index >= 0:
            commits.extend(records[: index + 1])
            return commits
        commits.extend(records)

    logger.debug("Boundary commit %s not found, history exhausted", commit)
    return commits


def _index_of_sha(records: list, sha: str) -> int:
    for i, record in enumerate(records):
        if isinstance(record, dict) and record.get("sha") == sha:
            return i
    return -1
