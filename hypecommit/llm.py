"""
Prompts and the chat-completion call behind every generated text.
"""

import json
from typing import Optional, Sequence

from openai import OpenAI

from hypecommit.config import Settings
from hypecommit.models import JiraIssue, PullRequest

COMMIT_PROMPT = (
    "Please generate a concise commit message based on the following changes, "
    "following the Conventional Commits specification"
)

HYPEDOC_PROMPT = """
Please create a short, concise summary of each of the following PRs, so that I can put it in my hypedoc to reference in the future.

It should:
- Emphasise the impact and benefits
- Be clear and concise
- Have a URL of the PR at the end of the line in brackets so I can click through to the PR (NOT a hyperlink, just the URL on its own)
- Be in reverse chronological order (most recent first)
- Be in plaintext, not markdown

Please follow the following example as a reference for desired format:
Feb 10, 2024:
- Successfully led the development of Project X's core module, improving system efficiency by 20%.
- Initiated and completed a code refactoring for the Legacy System, enhancing maintainability.
- Collaborated on the Integration Initiative, ensuring seamless connection between System A and B.
- Acted as the interim lead for the Deployment Team during critical release phases.

Jan 25, 2024:
- Spearheaded the documentation overhaul for Project Y, setting a new standard for project clarity.
- Managed cross-departmental teams to kickstart the Beta Launch of the New Platform.
- Coordinated with the Design Team to implement a new UI/UX for the Customer Portal.
"""


def make_client(settings: Settings) -> OpenAI:
    settings.require("openai_api_key")
    return OpenAI(api_key=settings.openai_api_key)


def chat(client: OpenAI, model: str, system_content: str, user_content: str) -> str:
    """Send one system + user exchange and return the reply text."""
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_content},
            {"role": "user", "content": user_content},
        ],
    )
    return (response.choices[0].message.content or "").strip()


def build_commit_prompt(
    ticket: Optional[JiraIssue] = None,
    context: Optional[str] = None,
    system_prompt: Optional[str] = None,
) -> str:
    """System prompt for commit messages.

    `system_prompt` replaces the default instructions; the ticket and any
    extra context are appended to whichever instructions are used.
    """
    lines = [(system_prompt or "").strip() or COMMIT_PROMPT]
    if ticket is not None:
        lines += ["", f"The change relates to Jira ticket {ticket.key}: {ticket.summary}"]
        if ticket.description:
            lines.append(ticket.description.strip())
    if context and context.strip():
        lines += ["", "Additional context:", context.strip()]
    return "\n".join(lines)


def generate_commit_message(
    client: OpenAI,
    model: str,
    diff: str,
    ticket: Optional[JiraIssue] = None,
    context: Optional[str] = None,
    system_prompt: Optional[str] = None,
) -> str:
    """Raw commit message for a staged diff; may still be wrapped in a code fence."""
    return chat(client, model, build_commit_prompt(ticket, context, system_prompt), diff)


def pull_requests_payload(prs: Sequence[PullRequest]) -> str:
    return json.dumps(
        [
            {"title": pr.title, "html_url": pr.html_url, "closed_at": pr.closed_at.isoformat()}
            for pr in prs
        ],
        indent=2,
    )


def summarize_pull_requests(client: OpenAI, model: str, prs: Sequence[PullRequest]) -> str:
    return chat(client, model, HYPEDOC_PROMPT, pull_requests_payload(prs))
