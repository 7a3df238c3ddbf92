"""CLI for listing the contributors of a commit range."""

import argparse
import json
import logging
import sys

import httpx

from .contributors import get_contributors
from .models import FetchError
from .settings import get_settings


def _log(msg: str):
    sys.stderr.write(f"[gh-contrib-list] {msg}\n")
    sys.stderr.flush()


def _describe_error(e: FetchError) -> str:
    msg = f"{e} (HTTP {e.http_status})"
    rl = e.rate_limit
    if rl.remaining is not None:
        msg += f", rate limit {rl.remaining}/{rl.limit} remaining"
    if rl.reset is not None:
        msg += f", resets at {rl.reset}"
    return msg


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="List the contributors of a GitHub repository since a given commit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("user", help="GitHub user or organization")
    parser.add_argument("repo", help="Repository name")
    parser.add_argument("commit", help="SHA of the oldest commit to include")
    parser.add_argument(
        "--to",
        default=None,
        help="Branch or SHA to start listing from (default: default branch)",
    )
    parser.add_argument(
        "--oauth-key",
        default=None,
        help="GitHub token (default: GITHUB_TOKEN from environment)",
    )
    parser.add_argument(
        "--retry",
        action="store_true",
        help="Retry with backoff while GitHub answers 202",
    )
    parser.add_argument(
        "--remove-greenkeeper",
        action="store_true",
        help="Skip commits authored by greenkeeperio-bot",
    )
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests and retries to stderr",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        contributors = get_contributors(
            args.user,
            args.repo,
            args.commit,
            oauth_key=args.oauth_key or get_settings().github_token,
            to=args.to,
            retry=args.retry,
            remove_greenkeeper=args.remove_greenkeeper,
        )
    except FetchError as e:
        _log(_describe_error(e))
        sys.exit(1)
    except httpx.TransportError as e:
        _log(f"Network error: {e}")
        sys.exit(1)
    except ValueError as e:
        _log(str(e))
        sys.exit(1)

    if args.format == "json":
        json.dump([c.to_dict() for c in contributors], sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        for c in contributors:
            print(f"{c.name} ({c.id}): {c.commit_count}")


if __name__ == "__main__":
    main()
