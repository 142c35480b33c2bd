from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_fields(payload: Mapping[str, Any], *field_names: str) -> None:
    missing = [name for name in field_names if payload.get(name) is None or not str(payload.get(name)).strip()]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def require_json_object(payload: Any) -> Mapping[str, Any]:
    """Request bodies must be JSON objects; a missing body reads as empty."""
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload
