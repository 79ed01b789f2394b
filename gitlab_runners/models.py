from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RunnerScope(str, Enum):
    ACTIVE = "active"
    PAUSED = "paused"
    ONLINE = "online"
    SPECIFIC = "specific"
    SHARED = "shared"


class BuildState(str, Enum):
    CREATED = "created"
    PENDING = "pending"
    RUNNING = "running"
    FAILED = "failed"
    SUCCESS = "success"
    CANCELED = "canceled"
    SKIPPED = "skipped"
    MANUAL = "manual"


class AccessLevel(str, Enum):
    NOT_PROTECTED = "not_protected"
    REF_PROTECTED = "ref_protected"


# -----------------------
# Resources (responses)
# -----------------------
class Runner(BaseModel):
    id: int
    description: Optional[str] = None
    active: bool = False
    is_shared: bool = False
    name: Optional[str] = None
    online: bool = False
    status: Optional[str] = None


class RunnerProject(BaseModel):
    id: int
    name: Optional[str] = None
    name_with_namespace: Optional[str] = None
    path: Optional[str] = None
    path_with_namespace: Optional[str] = None


class RunnerDetails(Runner):
    model_config = ConfigDict(populate_by_name=True)

    architecture: Optional[str] = None
    contacted_at: Optional[datetime] = None
    platform: Optional[str] = None
    projects: List[RunnerProject] = Field(default_factory=list)
    # The API really sends this key capitalized.
    token: Optional[str] = Field(default=None, alias="Token")
    revision: Optional[str] = None
    tag_list: List[str] = Field(default_factory=list)
    version: Optional[str] = None
    access_level: Optional[str] = None


class JobArtifactsFile(BaseModel):
    filename: Optional[str] = None
    size: int = 0


class Job(BaseModel):
    id: int
    name: Optional[str] = None
    stage: Optional[str] = None
    status: Optional[str] = None
    ref: Optional[str] = None
    tag: bool = False
    coverage: Optional[float] = None
    created_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    duration: Optional[float] = None
    artifacts_file: Optional[JobArtifactsFile] = None
    runner: Optional[Runner] = None
    commit: Optional[Dict[str, Any]] = None
    user: Optional[Dict[str, Any]] = None


# -----------------------
# Options (requests)
# Fields left as None are never sent.
# -----------------------
class ListOptions(BaseModel):
    page: Optional[int] = None
    per_page: Optional[int] = None


class ListRunnersOptions(ListOptions):
    scope: Optional[Union[RunnerScope, str]] = None


class ListProjectRunnersOptions(ListRunnersOptions):
    pass


class ListRunnersJobsOptions(ListOptions):
    status: Optional[Union[BuildState, str]] = None


class UpdateRunnerDetailsOptions(BaseModel):
    description: Optional[str] = None
    active: Optional[bool] = None
    tag_list: Optional[List[str]] = None
    run_untagged: Optional[bool] = None
    locked: Optional[bool] = None
    access_level: Optional[Union[AccessLevel, str]] = None


class EnableProjectRunnerOptions(BaseModel):
    runner_id: int
