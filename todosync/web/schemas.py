"""
Request body validation for the todo API.
Bodies must be JSON objects; unknown fields are rejected.
"""

from typing import Any, Dict, List

TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200

CREATE_FIELDS = {'title', 'description'}
UPDATE_FIELDS = {'title', 'description', 'isDone'}


class ValidationError(Exception):
    """Request body failed validation"""

    def __init__(self, details: List[str]):
        super().__init__("; ".join(details))
        self.details = details


def _check_object(data: Any, allowed: set) -> List[str]:
    if not isinstance(data, dict):
        return ['request body must be a JSON object']
    return [f"property {key} should not exist" for key in sorted(set(data) - allowed)]


def _check_text(data: Dict[str, Any], key: str, max_length: int, required: bool) -> List[str]:
    if key not in data or data[key] is None:
        return [f"{key} should not be empty"] if required else []

    value = data[key]
    if not isinstance(value, str):
        return [f"{key} must be a string"]
    if required and not value.strip():
        return [f"{key} should not be empty"]
    if len(value) > max_length:
        return [f"{key} must be shorter than or equal to {max_length} characters"]
    return []


def validate_create(data: Any) -> Dict[str, Any]:
    """
    Validate a create request

    Returns:
        Dict with 'title' and optional 'description'

    Raises:
        ValidationError: If the body is invalid
    """
    errors = _check_object(data, CREATE_FIELDS)
    if not errors:
        errors += _check_text(data, 'title', TITLE_MAX_LENGTH, required=True)
        errors += _check_text(data, 'description', DESCRIPTION_MAX_LENGTH, required=False)
    if errors:
        raise ValidationError(errors)

    return {
        'title': data['title'].strip(),
        'description': data.get('description'),
    }


def validate_update(data: Any) -> Dict[str, Any]:
    """
    Validate a partial update; absent or null fields are left out

    Raises:
        ValidationError: If the body is invalid
    """
    errors = _check_object(data, UPDATE_FIELDS)
    if not errors:
        if data.get('title') is not None:
            errors += _check_text(data, 'title', TITLE_MAX_LENGTH, required=True)
        errors += _check_text(data, 'description', DESCRIPTION_MAX_LENGTH, required=False)
        if data.get('isDone') is not None and not isinstance(data['isDone'], bool):
            errors.append('isDone must be a boolean value')
    if errors:
        raise ValidationError(errors)

    changes = {key: value for key, value in data.items() if value is not None}
    if 'title' in changes:
        changes['title'] = changes['title'].strip()
    return changes
