"""Recognise GitHub's "asset already exists" validation failure.

When an asset name collides, the uploads endpoint answers 422 with a body
like::

    {"message": "Validation Failed",
     "errors": [{"resource": "ReleaseAsset", "code": "already_exists", "field": "name"}]}

Only the first entry of ``errors`` is inspected. A payload that lists the
duplicate after some other validation error is not a duplicate.
"""

from __future__ import annotations

import json

from ghr.core.structured import as_str_dict, get_list

__all__ = ["is_duplicate_asset_error", "is_duplicate_asset_payload"]


def is_duplicate_asset_payload(payload: object) -> bool:
    """Return True if a decoded error body is the duplicate-name shape."""
    data = as_str_dict(payload)
    if data is None:
        return False

    errors = get_list(data, "errors")
    if not errors:
        return False

    first = as_str_dict(errors[0])
    if first is None:
        return False

    return (
        first.get("resource") == "ReleaseAsset"
        and first.get("code") == "already_exists"
        and first.get("field") == "name"
    )


def is_duplicate_asset_error(error: object) -> bool:
    """Return True if ``error`` means an asset with this name already exists.

    The error's ``message`` attribute (or its string form) is parsed as JSON.
    Anything that does not parse is never a duplicate.
    """
    message = getattr(error, "message", None)
    if not isinstance(message, str):
        message = str(error)

    try:
        payload: object = json.loads(message)
    except (json.JSONDecodeError, RecursionError):
        return False

    return is_duplicate_asset_payload(payload)
