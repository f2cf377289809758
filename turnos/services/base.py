"""
Helpers shared by the CRUD services.
"""

from typing import Any

from turnos.core.exceptions import IntegrationError, InvalidRequestError
from turnos.repositories.base import SQLAlchemyRepository
from turnos.utils.ids import generate_short_id

MAX_ID_ATTEMPTS = 5


async def allocate_short_id(repository: SQLAlchemyRepository, size: int = 4) -> str:
    """Generate a short id not yet used by ``repository``."""
    for _ in range(MAX_ID_ATTEMPTS):
        candidate = generate_short_id(size)
        if await repository.find_by_id(candidate) is None:
            return candidate
    raise IntegrationError("Could not allocate a unique id")


def clean_text(value: Any) -> Any:
    """Strip strings; return ``None`` for blank ones."""
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def build_update(
    fields: dict[str, Any],
    allowed: tuple[str, ...],
    required: tuple[str, ...] = (),
    empty_message: str = "No fields to update",
) -> dict[str, Any]:
    """
    Build a partial update from the fields the client sent.

    Args:
        fields: Provided fields (snake_case)
        allowed: Columns that can be updated
        required: Columns that cannot be cleared
        empty_message: Error message when nothing updatable was sent

    Raises:
        InvalidRequestError: If nothing updatable was sent or a required field is cleared
    """
    values = {name: clean_text(value) for name, value in fields.items() if name in allowed}
    if not values:
        raise InvalidRequestError(empty_message)
    for name in required:
        if name in values and values[name] is None:
            raise InvalidRequestError(f"Field '{name}' cannot be empty")
    return values
