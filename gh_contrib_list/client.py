"""GitHub REST client for paginated commit listings using httpx."""

import logging
from dataclasses import replace

import httpx

from .models import (
    DEFAULT_USER_AGENT,
    ClientError,
    FetchContext,
    FetchRequest,
    Page,
    ProcessingNotReadyError,
    RateLimit,
    RetryExhaustedError,
    ServerError,
)
from .retry import MAX_ATTEMPTS, retry_delay, with_backoff
from .settings import get_settings

logger = logging.getLogger(__name__)

NOT_READY_MESSAGE = "API returned status 202. Try again in a few moments."


class ContribClient:
    """Thin client issuing one GET per page of results."""

    def __init__(self, timeout=None, transport=None):
        if timeout is None:
            timeout = get_settings().request_timeout
        # GitHub answers 301 for renamed or transferred repositories
        self._client = httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    def _headers(self, request: FetchRequest) -> dict:
        headers = {
            "User-Agent": request.user_agent or DEFAULT_USER_AGENT,
            "Accept": "application/vnd.github+json",
        }
        if request.oauth_key:
            headers["Authorization"] = f"token {request.oauth_key}"
        return headers

    def _do_fetch(self, request: FetchRequest) -> Page:
        # Single GET -- no retry. Transport errors propagate untouched.
        logger.debug("GET %s (attempt %d)", request.url, request.attempt + 1)
        resp = self._client.get(request.url, headers=self._headers(request))

        if resp.status_code >= 500:
            raise ServerError(f"Server error on url {request.url}", _context(request, resp))
        if resp.status_code >= 400:
            raise ClientError(f"Client error on url {request.url}", _context(request, resp))
        if resp.status_code == 202:
            raise ProcessingNotReadyError(NOT_READY_MESSAGE, _context(request, resp))

        try:
            body = resp.json() if resp.content else None
        except ValueError as e:
            raise ServerError(f"Invalid JSON from url {request.url}", _context(request, resp)) from e

        return Page(
            status=resp.status_code,
            body=body,
            next_page_url=_parse_next_link(resp),
            etag=resp.headers.get("etag"),
        )

    def fetch_page(self, request: FetchRequest) -> Page:
        """Fetch one page of results.

        Raises ServerError on 5xx and ClientError on 4xx. A 202 raises
        ProcessingNotReadyError unless ``request.retry`` is set, in which case
        the request is repeated with backoff and RetryExhaustedError is raised
        once MAX_ATTEMPTS requests have all returned 202. Backoff is taken
        after attempts 0-3 only; attempt 4 is the last request.
        """
        if not request.retry:
            return self._do_fetch(request)

        try:
            return with_backoff(
                lambda attempt: self._do_fetch(replace(request, attempt=attempt)),
                max_attempts=MAX_ATTEMPTS,
                backoff=retry_delay,
                retry_on=(ProcessingNotReadyError,),
                start=request.attempt,
            )
        except ProcessingNotReadyError as e:
            raise RetryExhaustedError(str(e), e.context) from e

    def close(self):
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


def _parse_next_link(resp: httpx.Response) -> str | None:
    return resp.links.get("next", {}).get("url") or None


def _parse_int_header(resp: httpx.Response, name: str) -> int | None:
    val = resp.headers.get(name)
    if val is None:
        return None
    try:
        return int(val)
    except ValueError:
        return None


def _context(request: FetchRequest, resp: httpx.Response) -> FetchContext:
    return FetchContext(
        url=request.url,
        http_status=resp.status_code,
        rate_limit=RateLimit(
            limit=_parse_int_header(resp, "x-ratelimit-limit"),
            remaining=_parse_int_header(resp, "x-ratelimit-remaining"),
            reset=_parse_int_header(resp, "x-ratelimit-reset"),
        ),
    )
