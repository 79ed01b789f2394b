from __future__ import annotations

from typing import Any, Union
from urllib.parse import quote

from .errors import InvalidIDError

ID = Union[int, str]


def parse_id(value: Any) -> str:
    """
    Normalize a numeric or string identifier to its string form.
    Strings such as "group/project" pass through unchanged; escaping for the
    URL path is path_escape's job.
    """
    # bool is an int subclass, but True is never a valid id
    if isinstance(value, bool):
        raise InvalidIDError(f"invalid ID type {value!r}, the ID must be an int or a string")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        if not value.strip():
            raise InvalidIDError("invalid ID: empty string")
        return value
    raise InvalidIDError(f"invalid ID type {value!r}, the ID must be an int or a string")


def path_escape(value: str) -> str:
    return quote(value, safe="")


def path_id(value: Any) -> str:
    return path_escape(parse_id(value))
