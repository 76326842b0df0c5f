"""GitHub event routing and notification formatting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from ghcord.utils.logging import get_logger
from ghcord.webhooks.models import Color, EmbedField, Notification
from ghcord.webhooks.payloads import (
    CreateEvent,
    IssueCommentEvent,
    PullRequestEvent,
    PushEvent,
    ReleaseEvent,
    RepositoryEvent,
)

log = get_logger(__name__)

ELLIPSIS = "..."
MAX_LISTED_COMMITS = 5
PR_BODY_LIMIT = 200
COMMENT_BODY_LIMIT = 300
RELEASE_NOTES_LIMIT = 400


def truncate(text: str, limit: int) -> str:
    """Cut *text* to *limit* characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------

def format_push(event: PushEvent) -> Notification:
    commits = event.commits
    branch = event.ref.removeprefix("refs/heads/")
    repo = event.repository

    lines = [f"**{event.pusher.name}** pushed {len(commits)} commit(s) to `{branch}`"]
    if commits:
        lines.append("")
        lines.append("**Commits:**")
        for commit in commits[:MAX_LISTED_COMMITS]:
            first_line = commit.message.split("\n", 1)[0]
            lines.append(f"• [`{commit.id[:7]}`]({commit.url}) {first_line}")
        remaining = len(commits) - MAX_LISTED_COMMITS
        if remaining > 0:
            lines.append(f"... and {remaining} more commits")

    return Notification(
        title=f"📤 Push to {repo.name}",
        description="\n".join(lines),
        color=Color.GREEN,
        url=f"{repo.html_url}/compare/{event.before[:7]}...{event.after[:7]}",
        footer=f"Branch: {branch}",
    )


def format_pull_request(event: PullRequestEvent) -> Notification:
    action = event.action
    pr = event.pull_request

    color, emoji = Color.BLUE, "🔀"
    if action == "opened":
        color, emoji = Color.GREEN, "🆕"
    elif action == "closed":
        if pr.merged:
            color, emoji = Color.PURPLE, "✅"
        else:
            color, emoji = Color.RED, "❌"

    body = truncate(pr.body, PR_BODY_LIMIT) if pr.body else "No description provided"

    return Notification(
        title=f"{emoji} Pull Request {action} in {event.repository.name}",
        description=f"**{pr.user.login}** {action} pull request #{pr.number}\n\n{body}",
        color=color,
        url=pr.html_url,
        fields=[
            EmbedField(name="From → To", value=f"`{pr.head.ref}` → `{pr.base.ref}`"),
            EmbedField(name="Changes", value=f"+{pr.additions} -{pr.deletions}"),
        ],
        footer=f"PR #{pr.number}",
    )


def format_issue_comment(event: IssueCommentEvent) -> Notification:
    comment = event.comment
    issue = event.issue

    is_pr = issue.pull_request is not None
    emoji = "💬" if is_pr else "📝"
    kind = "Pull Request" if is_pr else "Issue"

    return Notification(
        title=f"{emoji} Comment {event.action} in {event.repository.name}",
        description=(
            f"**{comment.user.login}** {event.action} a comment on {kind.lower()} "
            f"#{issue.number}\n\n{truncate(comment.body, COMMENT_BODY_LIMIT)}"
        ),
        color=Color.GRAY,
        url=comment.html_url,
        footer=f"{kind} #{issue.number}: {issue.title}",
    )


def format_repository(event: RepositoryEvent) -> Notification:
    action = event.action
    repo = event.repository

    emoji, color = "📁", Color.BLUE
    if action == "created":
        emoji, color = "🆕", Color.GREEN
    elif action == "deleted":
        emoji, color = "🗑️", Color.RED

    description = f"**{event.sender.login}** {action} repository **{repo.name}**"
    if repo.description:
        description += f"\n\n{repo.description}"

    fields = []
    if repo.language:
        fields.append(EmbedField(name="Language", value=repo.language))

    return Notification(
        title=f"{emoji} Repository {action}",
        description=description,
        color=color,
        url=repo.html_url,
        fields=fields,
    )


def format_create(event: CreateEvent) -> Notification:
    ref_type = event.ref_type
    emoji = "🌿" if ref_type == "branch" else "🏷️"

    return Notification(
        title=f"{emoji} {ref_type.capitalize()} created in {event.repository.name}",
        description=f"**{event.sender.login}** created {ref_type} `{event.ref}`",
        color=Color.GREEN,
        url=event.repository.html_url,
    )


def format_release(event: ReleaseEvent) -> Notification:
    release = event.release
    notes = (
        truncate(release.body, RELEASE_NOTES_LIMIT)
        if release.body
        else "No release notes provided"
    )

    return Notification(
        title=f"🚀 Release {event.action} in {event.repository.name}",
        description=(
            f"**{release.author.login}** {event.action} release "
            f"**{release.name or release.tag_name}**\n\n{notes}"
        ),
        color=Color.BLUE,
        url=release.html_url,
        fields=[
            EmbedField(name="Tag", value=release.tag_name),
            EmbedField(name="Prerelease", value="Yes" if release.prerelease else "No"),
        ],
    )


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EventRoute:
    model: type[BaseModel]
    formatter: Callable[[Any], Notification]
    # None means every action is handled
    actions: frozenset[str] | None = None

    def accepts(self, action: Any) -> bool:
        return self.actions is None or action in self.actions


ROUTES: dict[str, EventRoute] = {
    "push": EventRoute(PushEvent, format_push),
    "pull_request": EventRoute(
        PullRequestEvent,
        format_pull_request,
        frozenset({"opened", "closed", "reopened"}),
    ),
    "issue_comment": EventRoute(
        IssueCommentEvent, format_issue_comment, frozenset({"created"})
    ),
    "repository": EventRoute(
        RepositoryEvent, format_repository, frozenset({"created", "deleted"})
    ),
    "create": EventRoute(CreateEvent, format_create),
    "release": EventRoute(
        ReleaseEvent, format_release, frozenset({"published", "created"})
    ),
}


def is_supported(event_type: str) -> bool:
    return event_type in ROUTES


def route(event_type: str, payload: Mapping[str, Any]) -> Notification | None:
    """Format *payload* for *event_type*, or return None when nothing should be sent.

    Raises pydantic.ValidationError when a handled payload is missing a field
    its formatter needs.
    """
    entry = ROUTES.get(event_type)
    if entry is None:
        log.info("event_unsupported", event_type=event_type)
        return None

    action = payload.get("action")
    if not entry.accepts(action):
        log.info("event_filtered", event_type=event_type, action=action)
        return None

    event = entry.model.model_validate(payload)
    return entry.formatter(event)
