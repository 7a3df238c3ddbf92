"""List the contributors of a GitHub repository since a given commit.

Walks the paginated commits endpoint back to a boundary commit and ranks
authors by commit count.
"""

from .cli import main
from .client import ContribClient
from .contributors import get_contrib_list, get_contributors
from .models import (
    ClientError,
    ContributorEntry,
    FetchError,
    FetchErrorKind,
    FetchRequest,
    Page,
    ProcessingNotReadyError,
    RetryExhaustedError,
    ServerError,
)
from .pagination import get_pagination, iter_pages

__all__ = [
    "main",
    "ContribClient",
    "get_contrib_list",
    "get_contributors",
    "get_pagination",
    "iter_pages",
    "ClientError",
    "ContributorEntry",
    "FetchError",
    "FetchErrorKind",
    "FetchRequest",
    "Page",
    "ProcessingNotReadyError",
    "RetryExhaustedError",
    "ServerError",
]

if __name__ == "__main__":
    main()
