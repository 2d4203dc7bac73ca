"""
json_pointer.py
---------------
Reads single values out of a JSON document with dotted paths ("error.code"),
which are turned into JSON pointers ("/error/code") before lookup.
"""
import json
from typing import Any, Optional

from .placeholders import to_text

_MISSING = object()


def to_pointer(path: str) -> str:
    return "/" + path.replace(".", "/")


def resolve(document: Any, pointer: str) -> Any:
    if pointer == "":
        return document
    current = document
    for token in pointer.lstrip("/").split("/"):
        token = token.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if token not in current:
                return _MISSING
            current = current[token]
        elif isinstance(current, list):
            if not token.isdigit() or int(token) >= len(current):
                return _MISSING
            current = current[int(token)]
        else:
            return _MISSING
    return current


def extract_text(body: Optional[str], path: Optional[str]) -> Optional[str]:
    """
    Returns the value at `path` in the JSON `body` as text, or None when the
    path is unset, the body is not JSON, or nothing non-empty is found there.
    """
    if not path or not body:
        return None
    try:
        document = json.loads(body)
    except ValueError:
        return None
    value = resolve(document, to_pointer(path))
    if value is _MISSING or value is None:
        return None
    return to_text(value) or None
