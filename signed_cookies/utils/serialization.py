import json
from typing import Any


def serialize(value: Any) -> str:
    """Encode a structured cookie value as compact JSON."""
    return json.dumps(value, separators=(",", ":"))


def deserialize(payload: str) -> Any:
    return json.loads(payload)
