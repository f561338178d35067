"""
Generic validation routine. Each resource owns a serializer class that only
declares fields and constraints; this module runs it and reports failures as an
ordered list of (field path, message) pairs.
"""
from typing import Any, Dict, List, Optional, Type

from rest_framework import serializers
from rest_framework.settings import api_settings


def validate(payload: Any, schema: Type[serializers.Serializer], partial: bool = False,
             context: Optional[dict] = None) -> Dict[str, Any]:
    """
    Validate `payload` against `schema` and return the validated record.

    Unknown keys are dropped. With partial=True every field becomes optional but
    keeps its format constraints, and defaults are not filled in.
    Raises rest_framework.exceptions.ValidationError with all field errors.
    """
    if payload is None:
        payload = {}
    serializer = schema(data=payload, partial=partial, context=context or {})
    serializer.is_valid(raise_exception=True)
    return dict(serializer.validated_data)


def flatten_errors(detail, path: str = "") -> List[Dict[str, str]]:
    """
    Flatten DRF's nested error structure into [{"field": "roles.0.title", "message": "..."}].
    """
    errors: List[Dict[str, str]] = []
    if isinstance(detail, dict):
        for key, value in detail.items():
            if key == api_settings.NON_FIELD_ERRORS_KEY and path:
                # object-level errors of a nested field belong to the field itself
                child = path
            else:
                child = f"{path}.{key}" if path else str(key)
            errors.extend(flatten_errors(value, child))
    elif isinstance(detail, list):
        for index, item in enumerate(detail):
            if isinstance(item, (dict, list)):
                child = f"{path}.{index}" if path else str(index)
                errors.extend(flatten_errors(item, child))
            else:
                errors.append({"field": path or "non_field_errors", "message": str(item)})
    else:
        errors.append({"field": path or "non_field_errors", "message": str(detail)})
    return errors
