# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read, write and merge JSON documents such as ``package.json`` and ``app.json``."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TypeAlias

JsonObject: TypeAlias = dict[str, Any]


class JsonDocumentError(ValueError):
    """Raised when a JSON document is unreadable or is not an object."""


def read_object(path: Path) -> JsonObject:
    """Return the JSON object stored at ``path``.

    Raises:
        JsonDocumentError: If the file is missing, malformed or not an object.
    """

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise JsonDocumentError(f"Unable to read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise JsonDocumentError(f"Malformed JSON in {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise JsonDocumentError(f"{path} must contain a JSON object")
    return payload


def write_object(path: Path, payload: Mapping[str, Any]) -> None:
    """Write ``payload`` to ``path`` with two-space indentation, preserving key order."""

    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> JsonObject:
    """Return ``base`` with ``override`` merged in; nested objects merge recursively."""

    result: JsonObject = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def merge_into(path: Path, fragment: Mapping[str, Any]) -> JsonObject:
    """Merge ``fragment`` into the document at ``path`` and write it back.

    A missing document is treated as empty.

    Returns:
        JsonObject: The merged document as written.
    """

    current = read_object(path) if path.exists() else {}
    merged = deep_merge(current, fragment)
    write_object(path, merged)
    return merged


__all__ = [
    "JsonDocumentError",
    "JsonObject",
    "deep_merge",
    "merge_into",
    "read_object",
    "write_object",
]
