from typing import Any, Dict, Optional

from activity_readme.models import ActivityEvent


def raw_event(
    event_type: str,
    action: str = "",
    repo: str = "a/b",
    number: int = 1,
    merged: Optional[bool] = None,
) -> Dict[str, Any]:
    """Raw record shaped like the public events API."""
    payload: Dict[str, Any] = {"action": action}
    if event_type == "PullRequestEvent":
        payload["number"] = number
        payload["pull_request"] = {"number": number, "merged": bool(merged)}
    else:
        payload["issue"] = {"number": number}
    return {"id": "1", "type": event_type, "repo": {"name": repo}, "payload": payload}


def make_event(event_type: str, action: str = "", repo: str = "a/b", number: int = 1, merged: bool = False):
    event = ActivityEvent.from_payload(raw_event(event_type, action, repo, number, merged))
    assert event is not None
    return event


def comment(number: int = 1, repo: str = "a/b", action: str = "created"):
    return make_event("IssueCommentEvent", action, repo, number)


def issue(action: str, number: int = 1, repo: str = "a/b"):
    return make_event("IssuesEvent", action, repo, number)


def pull_request(action: str, number: int = 1, repo: str = "a/b", merged: bool = False):
    return make_event("PullRequestEvent", action, repo, number, merged)
