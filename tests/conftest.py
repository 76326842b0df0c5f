"""Shared GitHub payload fixtures."""

import pytest


REPOSITORY = {
    "name": "widgets",
    "full_name": "acme/widgets",
    "html_url": "https://github.com/acme/widgets",
    "description": "Widgets for everyone",
    "language": "Python",
}


def make_commit(n: int) -> dict:
    sha = f"{n:07d}" + "a" * 33
    return {
        "id": sha,
        "url": f"https://github.com/acme/widgets/commit/{sha}",
        "message": f"Commit number {n}\n\nLonger explanation of change {n}",
    }


@pytest.fixture
def push_payload():
    def _make(commit_count: int = 3) -> dict:
        return {
            "ref": "refs/heads/main",
            "before": "1111111222222233333334444444555555566666",
            "after": "abcdef0123456789abcdef0123456789abcdef01",
            "pusher": {"name": "alice", "email": "alice@example.com"},
            "commits": [make_commit(i) for i in range(commit_count)],
            "repository": dict(REPOSITORY),
        }
    return _make


@pytest.fixture
def pull_request_payload():
    def _make(action: str = "opened", merged: bool = False, body: str | None = "Adds a thing") -> dict:
        return {
            "action": action,
            "number": 42,
            "pull_request": {
                "number": 42,
                "title": "Add feature",
                "html_url": "https://github.com/acme/widgets/pull/42",
                "body": body,
                "user": {"login": "bob"},
                "head": {"ref": "feature/thing"},
                "base": {"ref": "main"},
                "merged": merged,
                "additions": 120,
                "deletions": 7,
            },
            "repository": dict(REPOSITORY),
        }
    return _make


@pytest.fixture
def issue_comment_payload():
    def _make(body: str = "Looks good to me", on_pull_request: bool = False, action: str = "created") -> dict:
        issue = {"number": 7, "title": "Widgets are broken"}
        if on_pull_request:
            issue["pull_request"] = {"url": "https://api.github.com/repos/acme/widgets/pulls/7"}
        return {
            "action": action,
            "comment": {
                "body": body,
                "html_url": "https://github.com/acme/widgets/issues/7#issuecomment-1",
                "user": {"login": "carol"},
            },
            "issue": issue,
            "repository": dict(REPOSITORY),
        }
    return _make


@pytest.fixture
def repository_payload():
    def _make(action: str = "created", language: str | None = "Python") -> dict:
        repo = dict(REPOSITORY, language=language)
        return {
            "action": action,
            "repository": repo,
            "sender": {"login": "dave"},
        }
    return _make


@pytest.fixture
def create_payload():
    def _make(ref_type: str = "branch", ref: str = "feature/new") -> dict:
        return {
            "ref": ref,
            "ref_type": ref_type,
            "repository": dict(REPOSITORY),
            "sender": {"login": "erin"},
        }
    return _make


@pytest.fixture
def release_payload():
    def _make(action: str = "published", prerelease: bool = False, body: str | None = "Bug fixes") -> dict:
        return {
            "action": action,
            "release": {
                "tag_name": "v1.2.0",
                "name": "Version 1.2",
                "body": body,
                "html_url": "https://github.com/acme/widgets/releases/tag/v1.2.0",
                "prerelease": prerelease,
                "author": {"login": "frank"},
            },
            "repository": dict(REPOSITORY),
        }
    return _make
