"""Grouping key derivation for aggregate records.

A key identifies one (tag, parameters) series inside a flush window. Parameter
order never matters; any change in tag or in a key/value pair does.
"""

import json
from typing import Any, Mapping, Optional

Parameters = Mapping[str, Any]


def normalize_parameters(parameters: Optional[Parameters]) -> dict:
    """Return a plain dict copy, treating ``None`` as no parameters."""
    if not parameters:
        return {}
    return dict(parameters)


def grouping_key(tag: str, parameters: Optional[Parameters] = None) -> str:
    """Derive a stable grouping key from a tag and a flat parameter mapping."""
    return json.dumps(
        [tag, normalize_parameters(parameters)],
        sort_keys=True,
        separators=(",", ":"),
        default=str,
    )
