"""Task domain entity and field rules.

Represents the business concept of a task, independent of persistence.
"""

from dataclasses import dataclass
from typing import Any

from taskapi.domain.enums import TaskStatus
from taskapi.domain.exceptions import NoValidUpdatesException, ValidationException

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

# Only these fields may change after creation.
MUTABLE_TASK_FIELDS = ("title", "description", "status")


def _title_errors(title: Any) -> list[str]:
    if not isinstance(title, str):
        return ["title must be a string"]
    if not title:
        return ["title is required"]
    if len(title) > TITLE_MAX_LENGTH:
        return [f"title must be at most {TITLE_MAX_LENGTH} characters"]
    return []


def _description_errors(description: Any) -> list[str]:
    if not isinstance(description, str):
        return ["description must be a string"]
    if len(description) > DESCRIPTION_MAX_LENGTH:
        return [f"description must be at most {DESCRIPTION_MAX_LENGTH} characters"]
    return []


def _status_errors(status: Any) -> list[str]:
    if status not in TaskStatus.values():
        return [f"status must be one of {', '.join(TaskStatus.values())}"]
    return []


_FIELD_CHECKS = {
    "title": _title_errors,
    "description": _description_errors,
    "status": _status_errors,
}


def field_errors(fields: dict[str, Any]) -> list[str]:
    """Return constraint violations for the given mutable fields, in field order."""
    errors: list[str] = []
    for name in MUTABLE_TASK_FIELDS:
        if name in fields:
            errors.extend(_FIELD_CHECKS[name](fields[name]))
    return errors


def filter_task_updates(updates: dict[str, Any]) -> dict[str, Any]:
    """Keep only mutable fields from a client field-map and validate them.

    Disallowed keys are dropped silently.

    Raises:
        NoValidUpdatesException: If no mutable field remains.
        ValidationException: If a kept value violates its constraint.
    """
    kept = {k: v for k, v in updates.items() if k in MUTABLE_TASK_FIELDS}
    if not kept:
        raise NoValidUpdatesException()
    errors = field_errors(kept)
    if errors:
        raise ValidationException(errors)
    return kept


@dataclass
class TaskEntity:
    """Task about to be persisted. Validation runs on construction.

    An empty status means "not set by the caller" and normalizes to open.
    """

    title: str
    owner_id: str
    description: str = ""
    status: str = ""

    def __post_init__(self) -> None:
        if not self.status:
            self.status = TaskStatus.OPEN.value
        if self.description is None:
            self.description = ""
        self.validate()

    def validate(self) -> None:
        """Validate task business rules. Raises ValidationException if invalid."""
        errors = field_errors(
            {
                "title": self.title,
                "description": self.description,
                "status": self.status,
            }
        )
        if not self.owner_id:
            errors.append("owner_id is required")
        if errors:
            raise ValidationException(errors)
