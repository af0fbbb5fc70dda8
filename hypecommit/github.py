"""
Merged pull requests of one author, via the GitHub search API.
"""

from datetime import datetime
from typing import Optional

import httpx

from hypecommit.models import PullRequest

GITHUB_API_URL = "https://api.github.com"
SEARCH_PAGE_SIZE = 100


def auth_headers(token: Optional[str]) -> dict:
    """Authorization header only when a token is set."""
    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def parse_timestamp(ts: str) -> datetime:
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))


def fetch_merged_pull_requests(
    client: httpx.Client,
    username: str,
    since: datetime,
    token: Optional[str] = None,
) -> list[PullRequest]:
    """Merged PRs by `username` closed after `since` (timezone-aware), newest first."""
    response = client.get(
        f"{GITHUB_API_URL}/search/issues",
        params={
            "q": f"is:pr author:{username} is:merged",
            "sort": "created",
            "order": "desc",
            "per_page": SEARCH_PAGE_SIZE,
        },
        headers=auth_headers(token),
        timeout=30,
    )
    response.raise_for_status()

    prs = []
    for item in response.json().get("items", []):
        closed_at = item.get("closed_at")
        if not closed_at:
            continue
        pr = PullRequest(title=item["title"], html_url=item["html_url"], closed_at=parse_timestamp(closed_at))
        if pr.closed_at > since:
            prs.append(pr)
    return prs
