from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import ConfigError, DecodeError, ErrorResponse, GitLabError, RequestOptionError, TransportError
from .ids import parse_id

log = logging.getLogger("gitlab_runners")

USER_AGENT = "gitlab-runners-python"

RequestOption = Callable[[requests.Request], None]
Options = Union[BaseModel, Mapping[str, Any], None]

_BODY_METHODS = {"POST", "PUT", "PATCH"}


# -----------------------
# Per-call request options
# -----------------------
def with_sudo(uid: Any) -> RequestOption:
    """Run the call as another user (admin tokens only)."""

    def apply(req: requests.Request) -> None:
        req.headers["Sudo"] = parse_id(uid)

    return apply


def with_header(name: str, value: str) -> RequestOption:
    def apply(req: requests.Request) -> None:
        req.headers[name] = value

    return apply


# -----------------------
# Response metadata
# -----------------------
def _int_header(headers: Mapping[str, str], name: str) -> int:
    raw = (headers.get(name) or "").strip()
    try:
        return int(raw) if raw else 0
    except ValueError:
        return 0


class Response:
    """A requests.Response plus the pagination headers GitLab sends on list calls."""

    def __init__(self, raw: requests.Response):
        self.raw = raw
        h = raw.headers
        self.total_items = _int_header(h, "X-Total")
        self.total_pages = _int_header(h, "X-Total-Pages")
        self.items_per_page = _int_header(h, "X-Per-Page")
        self.current_page = _int_header(h, "X-Page")
        self.next_page = _int_header(h, "X-Next-Page")
        self.previous_page = _int_header(h, "X-Prev-Page")

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self):
        return self.raw.headers

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}]>"


# -----------------------
# Serialization helpers
# -----------------------
def _dump(opt: Options) -> Dict[str, Any]:
    if opt is None:
        return {}
    if isinstance(opt, BaseModel):
        return opt.model_dump(mode="json", by_alias=True, exclude_none=True)
    return {k: v for k, v in opt.items() if v is not None}


def _query_params(opt: Options) -> List[Tuple[str, Any]]:
    params: List[Tuple[str, Any]] = []
    for key, value in _dump(opt).items():
        if isinstance(value, (list, tuple)):
            params.extend((f"{key}[]", v) for v in value)
        elif isinstance(value, bool):
            params.append((key, "true" if value else "false"))
        else:
            params.append((key, value))
    return params


def _error_message(raw: requests.Response) -> str:
    try:
        body = raw.json()
    except ValueError:
        return (raw.text or "").strip()
    if isinstance(body, dict):
        msg = body.get("message") or body.get("error")
        if msg is not None:
            return msg if isinstance(msg, str) else str(msg)
    return str(body)


class Client:
    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_s: float = 30,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        if timeout_s is None or not timeout_s > 0:
            raise ConfigError(f"timeout_s must be positive, got {timeout_s!r}")
        self.timeout_s = timeout_s
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

        from .runners import RunnersService

        self.runners = RunnersService(self)

    @classmethod
    def from_settings(cls, settings, session: Optional[requests.Session] = None) -> "Client":
        return cls(settings.url, token=settings.token or None, timeout_s=settings.timeout_s, session=session)

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def new_request(
        self,
        method: str,
        path: str,
        opt: Options = None,
        options: Iterable[RequestOption] = (),
    ) -> requests.PreparedRequest:
        """
        Build the request for `path` (relative to the API root).
        Options go into the query string for GET/DELETE and into a JSON body
        for POST/PUT.
        """
        method = method.upper()
        headers = {"Accept": "application/json", "User-Agent": USER_AGENT}
        if self.token:
            headers["PRIVATE-TOKEN"] = self.token

        req = requests.Request(method, f"{self.base_url}/{path.lstrip('/')}", headers=headers)
        if method in _BODY_METHODS:
            if opt is not None:
                req.json = _dump(opt)
        else:
            req.params = _query_params(opt)

        for fn in options:
            try:
                fn(req)
            except GitLabError as e:
                raise RequestOptionError(str(e)) from e
            except (TypeError, ValueError) as e:
                raise RequestOptionError(f"failed to apply request option: {e}") from e

        return req.prepare()

    def do(self, req: requests.PreparedRequest, result_type: Any = None) -> Tuple[Any, Response]:
        """
        Send `req` and decode the body into `result_type` (any type pydantic
        can validate). With no result_type the body is discarded.
        """
        log.debug("%s %s", req.method, req.url)
        try:
            raw = self.session.send(req, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise TransportError(f"{req.method} {req.url}: {e}") from e

        resp = Response(raw)
        if not 200 <= raw.status_code < 300:
            message = _error_message(raw)
            log.warning("%s %s -> %s %s", req.method, req.url, raw.status_code, message)
            raise ErrorResponse(resp, message)

        if result_type is None:
            return None, resp

        try:
            value = TypeAdapter(result_type).validate_json(raw.content)
        except ValidationError as e:
            raise DecodeError(f"cannot decode response of {req.method} {req.url}: {e}", resp) from e
        return value, resp
