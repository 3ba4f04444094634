# app/core/uniqueness.py
import logging
import uuid
from typing import Any, Mapping, NoReturn, Sequence

from sqlmodel import Session, SQLModel, or_, select

from app.core.exceptions import ConflictError

logger = logging.getLogger(__name__)

# How a field is named in user-facing messages, when it differs from the column
FIELD_LABELS: dict[str, str] = {
    "phone": "phone number",
    "url": "URL",
}


def find_conflicting_field(
    session: Session,
    model: type[SQLModel],
    fields: Sequence[str],
    values: Mapping[str, Any],
    exclude_id: uuid.UUID | str | None = None,
) -> str | None:
    """
    Return the first field (in `fields` order) whose proposed value is
    already held by another row of `model`, or None.

    One query fetches every row that collides on any field; the record
    being written (`exclude_id`) never counts as a collision.
    """
    conditions = [
        getattr(model, field) == values[field]
        for field in fields
        if values.get(field) is not None
    ]
    if not conditions:
        return None

    stmt = select(model).where(or_(*conditions))
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)

    conflicts = session.exec(stmt).all()
    if not conflicts:
        return None

    for field in fields:
        if any(getattr(row, field) == values.get(field) for row in conflicts):
            return field
    return None


def ensure_unique(
    session: Session,
    model: type[SQLModel],
    fields: Sequence[str],
    values: Mapping[str, Any],
    exclude_id: uuid.UUID | str | None,
    label: str,
) -> None:
    """
    Raise ConflictError naming the highest-priority colliding field.

    Example message: "A store with the same phone number already exists"
    """
    field = find_conflicting_field(session, model, fields, values, exclude_id)
    if field is None:
        return

    message = f"A {label} with the same {FIELD_LABELS.get(field, field)} already exists"
    logger.info("Rejected %s upsert (id=%s): %s", label, exclude_id, message)
    raise ConflictError(message)


def raise_for_integrity_error(
    session: Session,
    model: type[SQLModel],
    fields: Sequence[str],
    values: Mapping[str, Any],
    exclude_id: uuid.UUID | str | None,
    label: str,
    exc: Exception,
) -> NoReturn:
    """
    Turn a unique-index violation from the database into a ConflictError.

    Another request may have written a colliding row between our check
    and our commit; re-running the check names the field when it can.
    """
    session.rollback()
    ensure_unique(session, model, fields, values, exclude_id, label)
    raise ConflictError(f"A {label} with the same details already exists") from exc
