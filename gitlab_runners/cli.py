"""
gitlab-runners: command line front end for the runner endpoints.

JSON goes to stdout, logs go to stderr.
Reads GITLAB_URL / GITLAB_TOKEN / GITLAB_HTTP_TIMEOUT_S / GITLAB_LOG_LEVEL.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

from pydantic import BaseModel

from .client import Client, with_sudo
from .config import load_settings
from .errors import ConfigError, GitLabError
from .models import (
    EnableProjectRunnerOptions,
    ListProjectRunnersOptions,
    ListRunnersJobsOptions,
    ListRunnersOptions,
    UpdateRunnerDetailsOptions,
)

log = logging.getLogger("gitlab_runners")


def _id(s: str):
    try:
        return int(s)
    except ValueError:
        return s


def _flag(s: str) -> bool:
    v = s.strip().lower()
    if v in ("1", "true", "yes", "on"):
        return True
    if v in ("0", "false", "no", "off"):
        return False
    raise argparse.ArgumentTypeError(f"expected true/false, got {s!r}")


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="gitlab-runners", description="Manage GitLab CI runners.")
    p.add_argument("--sudo", default=None, help="Perform the call as this user (admin token required).")
    sub = p.add_subparsers(dest="command", required=True)

    def paged(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("--page", type=int, default=None)
        sp.add_argument("--per-page", type=int, default=None)

    for name, help_text in (("list", "List runners owned by the user."), ("list-all", "List all runners (admin).")):
        sp = sub.add_parser(name, help=help_text)
        sp.add_argument("--scope", default=None, help="active, paused, online, specific or shared.")
        paged(sp)

    sp = sub.add_parser("project-list", help="List runners of a project.")
    sp.add_argument("project")
    sp.add_argument("--scope", default=None)
    paged(sp)

    sp = sub.add_parser("get", help="Show runner details.")
    sp.add_argument("runner")

    sp = sub.add_parser("update", help="Update runner details; only given fields change.")
    sp.add_argument("runner")
    sp.add_argument("--description", default=None)
    sp.add_argument("--active", type=_flag, default=None)
    sp.add_argument("--tag", dest="tags", action="append", default=None, help="Repeat for several tags.")
    sp.add_argument("--run-untagged", type=_flag, default=None)
    sp.add_argument("--locked", type=_flag, default=None)
    sp.add_argument("--access-level", default=None, help="not_protected or ref_protected.")

    sp = sub.add_parser("remove", help="Remove a runner.")
    sp.add_argument("runner")

    sp = sub.add_parser("jobs", help="List jobs of a runner.")
    sp.add_argument("runner")
    sp.add_argument("--status", default=None, help="running, success, failed or canceled.")
    paged(sp)

    sp = sub.add_parser("enable", help="Enable a runner in a project.")
    sp.add_argument("project")
    sp.add_argument("runner", type=int)

    sp = sub.add_parser("disable", help="Disable a runner in a project.")
    sp.add_argument("project")
    sp.add_argument("runner")

    return p.parse_args(argv)


def run_command(client: Client, args: argparse.Namespace) -> Any:
    svc = client.runners
    options = [with_sudo(_id(args.sudo))] if args.sudo else []
    cmd = args.command

    if cmd == "list":
        opt = ListRunnersOptions(scope=args.scope, page=args.page, per_page=args.per_page)
        value, _ = svc.list_runners(opt, *options)
    elif cmd == "list-all":
        opt = ListRunnersOptions(scope=args.scope, page=args.page, per_page=args.per_page)
        value, _ = svc.list_all_runners(opt, *options)
    elif cmd == "project-list":
        opt = ListProjectRunnersOptions(scope=args.scope, page=args.page, per_page=args.per_page)
        value, _ = svc.list_project_runners(_id(args.project), opt, *options)
    elif cmd == "get":
        value, _ = svc.get_runner_details(_id(args.runner), *options)
    elif cmd == "update":
        opt = UpdateRunnerDetailsOptions(
            description=args.description,
            active=args.active,
            tag_list=args.tags,
            run_untagged=args.run_untagged,
            locked=args.locked,
            access_level=args.access_level,
        )
        value, _ = svc.update_runner_details(_id(args.runner), opt, *options)
    elif cmd == "remove":
        resp = svc.remove_runner(_id(args.runner), *options)
        value = {"status": resp.status_code}
    elif cmd == "jobs":
        opt = ListRunnersJobsOptions(status=args.status, page=args.page, per_page=args.per_page)
        value, _ = svc.list_runner_jobs(_id(args.runner), opt, *options)
    elif cmd == "enable":
        opt = EnableProjectRunnerOptions(runner_id=args.runner)
        value, _ = svc.enable_project_runner(_id(args.project), opt, *options)
    elif cmd == "disable":
        resp = svc.disable_project_runner(_id(args.project), _id(args.runner), *options)
        value = {"status": resp.status_code}
    else:
        raise ValueError(f"unknown command: {cmd}")

    return _jsonable(value)


def cli(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level="INFO",
        format="[gitlab-runners] %(message)s",
        stream=sys.stderr,
        force=True,
    )

    try:
        settings = load_settings()
    except ConfigError as e:
        log.error("%s", e)
        return 2
    logging.getLogger().setLevel(settings.log_level)

    if not settings.url:
        log.error("GITLAB_URL is empty.")
        return 2
    if not settings.token:
        log.error("GITLAB_TOKEN is not set.")
        return 2

    with Client.from_settings(settings) as client:
        try:
            out = run_command(client, args)
        except GitLabError as e:
            log.error("%s", e)
            return 1

    print(json.dumps(out, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
