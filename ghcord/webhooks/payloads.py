"""Typed views of the GitHub webhook payloads ghcord formats.

Only the fields the formatters read are declared; everything else in the
delivery is ignored. Fields without a default are required and a delivery
missing one fails validation instead of producing a partial notification.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class User(BaseModel):
    login: str


class Pusher(BaseModel):
    name: str


class Repository(BaseModel):
    name: str
    html_url: str
    full_name: str = ""
    description: str | None = None
    language: str | None = None


class Commit(BaseModel):
    id: str
    url: str
    message: str


class BranchRef(BaseModel):
    ref: str


class PullRequest(BaseModel):
    number: int
    html_url: str
    user: User
    head: BranchRef
    base: BranchRef
    additions: int
    deletions: int
    title: str = ""
    body: str | None = None
    # null on some deliveries; treated as not merged
    merged: bool | None = False


class Issue(BaseModel):
    number: int
    title: str
    # Present only when the issue is a pull request
    pull_request: dict[str, Any] | None = None


class Comment(BaseModel):
    body: str
    html_url: str
    user: User


class Release(BaseModel):
    tag_name: str
    html_url: str
    author: User
    name: str | None = None
    body: str | None = None
    prerelease: bool = False


# ---------------------------------------------------------------------------
# Event payloads
# ---------------------------------------------------------------------------

class PushEvent(BaseModel):
    ref: str
    before: str
    after: str
    pusher: Pusher
    repository: Repository
    commits: list[Commit] = Field(default_factory=list)


class PullRequestEvent(BaseModel):
    action: str
    pull_request: PullRequest
    repository: Repository


class IssueCommentEvent(BaseModel):
    action: str
    comment: Comment
    issue: Issue
    repository: Repository


class RepositoryEvent(BaseModel):
    action: str
    repository: Repository
    sender: User


class CreateEvent(BaseModel):
    ref: str
    ref_type: str
    repository: Repository
    sender: User


class ReleaseEvent(BaseModel):
    action: str
    release: Release
    repository: Repository
