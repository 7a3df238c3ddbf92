"""Data models, constants and errors for contributor collection."""

from dataclasses import dataclass, field
from enum import Enum

API_BASE = "https://api.github.com"
DEFAULT_USER_AGENT = "gh-contrib-list"
GREENKEEPER_LOGIN = "greenkeeperio-bot"
PER_PAGE = 100  # GitHub REST API max page size


@dataclass(frozen=True)
class FetchRequest:
    """One call to the commits endpoint. Rebuilt, never mutated."""

    url: str
    user_agent: str = DEFAULT_USER_AGENT
    oauth_key: str | None = None
    retry: bool = False
    attempt: int = 0


@dataclass
class Page:
    """Response from a single GET."""

    status: int
    body: dict | list | None
    next_page_url: str | None = None
    etag: str | None = None

    @property
    def records(self) -> list:
        if self.body is None:
            return []
        if isinstance(self.body, list):
            return self.body
        return [self.body]


@dataclass(frozen=True)
class RateLimit:
    limit: int | None = None
    remaining: int | None = None
    reset: int | None = None  # unix timestamp


@dataclass(frozen=True)
class FetchContext:
    url: str
    http_status: int
    rate_limit: RateLimit = field(default_factory=RateLimit)


class FetchErrorKind(Enum):
    SERVER = "server"
    CLIENT = "client"
    NOT_READY = "not_ready"
    RETRY_EXHAUSTED = "retry_exhausted"


class FetchError(Exception):
    """HTTP-level failure with the request/response context attached."""

    kind: FetchErrorKind

    def __init__(self, message: str, context: FetchContext):
        super().__init__(message)
        self.context = context

    @property
    def url(self) -> str:
        return self.context.url

    @property
    def http_status(self) -> int:
        return self.context.http_status

    @property
    def rate_limit(self) -> RateLimit:
        return self.context.rate_limit


class ServerError(FetchError):
    kind = FetchErrorKind.SERVER


class ClientError(FetchError):
    kind = FetchErrorKind.CLIENT


class ProcessingNotReadyError(FetchError):
    """API answered 202: the data is still being computed."""

    kind = FetchErrorKind.NOT_READY


class RetryExhaustedError(ProcessingNotReadyError):
    kind = FetchErrorKind.RETRY_EXHAUSTED


@dataclass
class ContributorEntry:
    id: str
    name: str | None
    commit_count: int = 1

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "commitCount": self.commit_count}
