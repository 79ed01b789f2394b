from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from gitlab_runners.client import Client

BASE_URL = "https://gitlab.example.com/api/v4"


def make_response(status: int = 200, body: Any = None, headers: Optional[Dict[str, str]] = None) -> requests.Response:
    r = requests.Response()
    r.status_code = status
    if body is None:
        r._content = b""
    elif isinstance(body, (bytes, str)):
        r._content = body.encode() if isinstance(body, str) else body
    else:
        r._content = json.dumps(body).encode()
        r.headers["Content-Type"] = "application/json"
    r.headers.update(headers or {})
    r.encoding = "utf-8"
    return r


class FakeSession:
    """Stands in for requests.Session: records what was sent, replays queued responses."""

    def __init__(self):
        self.sent: List[requests.PreparedRequest] = []
        self.timeouts: List[Any] = []
        self.queue: List[Any] = []
        self.closed = False

    def reply(self, status: int = 200, body: Any = None, headers: Optional[Dict[str, str]] = None) -> None:
        self.queue.append(make_response(status, body, headers))

    def fail(self, exc: Exception) -> None:
        self.queue.append(exc)

    def send(self, req: requests.PreparedRequest, timeout=None) -> requests.Response:
        self.sent.append(req)
        self.timeouts.append(timeout)
        item = self.queue.pop(0)
        if isinstance(item, Exception):
            raise item
        item.request = req
        item.url = req.url
        return item

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> requests.PreparedRequest:
        return self.sent[-1]


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session) -> Client:
    return Client(BASE_URL, token="secret", timeout_s=5, session=session)


RUNNER_JSON = {
    "id": 6,
    "description": "test-1-20150125",
    "active": True,
    "is_shared": False,
    "name": None,
    "online": True,
    "status": "online",
}

RUNNER_DETAILS_JSON = {
    "active": True,
    "architecture": None,
    "description": "test-1-20150125",
    "id": 6,
    "is_shared": False,
    "contacted_at": "2016-01-25T16:39:48.066Z",
    "name": None,
    "online": True,
    "status": "online",
    "platform": None,
    "projects": [
        {
            "id": 1,
            "name": "GitLab Community Edition",
            "name_with_namespace": "GitLab.org / GitLab Community Edition",
            "path": "gitlab-ce",
            "path_with_namespace": "gitlab-org/gitlab-ce",
        }
    ],
    "Token": "205086a8e3b9a2b818ffac9b89d102",
    "revision": None,
    "tag_list": ["ruby", "mysql"],
    "version": None,
    "access_level": "ref_protected",
}
