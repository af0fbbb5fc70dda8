"""
A small wrapper around the Jira REST API (v2).
"""

from typing import Optional

import httpx

from hypecommit.models import JiraIssue

DEFAULT_PROTOCOL = "https"
OPEN_STATUSES = '(Open, "In Progress", Reopened)'


def to_jira_issue(data: dict) -> JiraIssue:
    """Convert an issue payload from the API into a JiraIssue."""
    fields = data.get("fields") or {}
    return JiraIssue(
        key=data["key"],
        summary=fields.get("summary") or "",
        description=fields.get("description") or "",
    )


class JiraApi:
    """Read-only access to the issues of one Jira user."""

    def __init__(
        self,
        username: str,
        api_key: str,
        host: str,
        protocol: str = DEFAULT_PROTOCOL,
        client: Optional[httpx.Client] = None,
    ):
        self.username = username
        self.base_url = f"{protocol}://{host}/rest/api/2"
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=30)
        self.auth = httpx.BasicAuth(username, api_key)

    def _get(self, path: str, params: Optional[dict] = None) -> httpx.Response:
        return self.client.get(f"{self.base_url}{path}", params=params, auth=self.auth)

    def user_issues_jql(self, open_only: bool = True) -> str:
        # JQL rejects a bare "@" inside the assignee string
        assignee = self.username.replace("@", "\\u0040")
        jql = f'assignee = "{assignee}"'
        if open_only:
            jql += f" AND status in {OPEN_STATUSES}"
        return jql + " ORDER BY updated DESC"

    def get_user_issues(self, open_only: bool = True) -> list[JiraIssue]:
        """Issues assigned to the user; only open ones unless `open_only` is False."""
        response = self._get(
            "/search",
            params={"jql": self.user_issues_jql(open_only), "fields": "summary,description"},
        )
        response.raise_for_status()
        return [to_jira_issue(issue) for issue in response.json().get("issues", [])]

    def get_issue(self, ticket_number: str) -> Optional[JiraIssue]:
        """Issue details, or None when the ticket does not exist."""
        response = self._get(f"/issue/{ticket_number}", params={"fields": "summary,description"})
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return to_jira_issue(response.json())

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()
