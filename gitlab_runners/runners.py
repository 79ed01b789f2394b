"""
Runner endpoints of the GitLab API.

GitLab API docs: https://docs.gitlab.com/ee/api/runners.html

Every call returns `(value, response)`, or just `response` for deletes.
Errors are raised, never returned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Tuple

from .client import RequestOption, Response
from .ids import ID, path_id
from .models import (
    EnableProjectRunnerOptions,
    Job,
    ListProjectRunnersOptions,
    ListRunnersJobsOptions,
    ListRunnersOptions,
    Runner,
    RunnerDetails,
    UpdateRunnerDetailsOptions,
)

if TYPE_CHECKING:
    from .client import Client


class RunnersService:
    def __init__(self, client: "Client"):
        self.client = client

    # -----------------------
    # Listing
    # -----------------------
    def list_runners(
        self, opt: Optional[ListRunnersOptions] = None, *options: RequestOption
    ) -> Tuple[List[Runner], Response]:
        """Runners available to the authenticated user."""
        req = self.client.new_request("GET", "runners", opt, options)
        return self.client.do(req, List[Runner])

    def list_all_runners(
        self, opt: Optional[ListRunnersOptions] = None, *options: RequestOption
    ) -> Tuple[List[Runner], Response]:
        """Every runner in the instance. Admin only."""
        req = self.client.new_request("GET", "runners/all", opt, options)
        return self.client.do(req, List[Runner])

    def list_project_runners(
        self, pid: ID, opt: Optional[ListProjectRunnersOptions] = None, *options: RequestOption
    ) -> Tuple[List[Runner], Response]:
        path = f"projects/{path_id(pid)}/runners"
        req = self.client.new_request("GET", path, opt, options)
        return self.client.do(req, List[Runner])

    # -----------------------
    # Single runner
    # -----------------------
    def get_runner_details(self, rid: ID, *options: RequestOption) -> Tuple[RunnerDetails, Response]:
        path = f"runners/{path_id(rid)}"
        req = self.client.new_request("GET", path, None, options)
        return self.client.do(req, RunnerDetails)

    def update_runner_details(
        self, rid: ID, opt: UpdateRunnerDetailsOptions, *options: RequestOption
    ) -> Tuple[RunnerDetails, Response]:
        """Partial update: fields left as None are not touched server side."""
        path = f"runners/{path_id(rid)}"
        req = self.client.new_request("PUT", path, opt, options)
        return self.client.do(req, RunnerDetails)

    def remove_runner(self, rid: ID, *options: RequestOption) -> Response:
        path = f"runners/{path_id(rid)}"
        req = self.client.new_request("DELETE", path, None, options)
        _, resp = self.client.do(req)
        return resp

    def list_runner_jobs(
        self, rid: ID, opt: Optional[ListRunnersJobsOptions] = None, *options: RequestOption
    ) -> Tuple[List[Job], Response]:
        """Jobs that are being processed or were processed by the runner."""
        path = f"runners/{path_id(rid)}/jobs"
        req = self.client.new_request("GET", path, opt, options)
        return self.client.do(req, List[Job])

    # -----------------------
    # Project association
    # -----------------------
    def enable_project_runner(
        self, pid: ID, opt: EnableProjectRunnerOptions, *options: RequestOption
    ) -> Tuple[Runner, Response]:
        path = f"projects/{path_id(pid)}/runners"
        req = self.client.new_request("POST", path, opt, options)
        return self.client.do(req, Runner)

    def disable_project_runner(self, pid: ID, rid: ID, *options: RequestOption) -> Response:
        path = f"projects/{path_id(pid)}/runners/{path_id(rid)}"
        req = self.client.new_request("DELETE", path, None, options)
        _, resp = self.client.do(req)
        return resp
