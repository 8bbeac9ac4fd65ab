"""
serializer.py
Provides utility functions for serializing and deserializing game events and state snapshots to/from JSON.
Used by session.py to export its event stream and turn log.
"""

import dataclasses
import json
from enum import Enum
from typing import Any


def _encode(o: Any):
    if isinstance(o, Enum):
        return o.value
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        data = {f.name: getattr(o, f.name) for f in dataclasses.fields(o)}
        # stage dataclasses keep their phase as a class attribute
        phase = getattr(type(o), "phase", None)
        if isinstance(phase, Enum):
            data["phase"] = phase.value
        return data
    return getattr(o, '__dict__', str(o))


def dumps(obj: Any, **kwargs) -> str:
    """
    Serialize a Python object (including dataclasses and enums) to a JSON string.
    Args:
        obj: Object to serialize.
        **kwargs: Passed through to json.dumps (e.g. indent).
    Returns:
        str: JSON string.
    """
    return json.dumps(obj, default=_encode, **kwargs)


def loads(s: str):
    """
    Deserialize a JSON string to a Python object (dict/list).
    Args:
        s (str): JSON string.
    Returns:
        object: Deserialized Python object.
    """
    return json.loads(s)
