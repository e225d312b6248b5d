from __future__ import annotations

from typing import Any, Mapping, TypeVar

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from slugconnect.database import Base


ModelT = TypeVar("ModelT", bound=Base)


class StoreError(RuntimeError):
    pass


class StoreConnectionError(StoreError):
    pass


class UniqueViolation(StoreError):
    pass


# MySQL ER_DUP_ENTRY and PostgreSQL unique_violation; sqlite only says so in the message.
_UNIQUE_ERRNOS = {1062}
_UNIQUE_SQLSTATES = {"23505"}


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) in _UNIQUE_SQLSTATES:
        return True
    args = getattr(orig, "args", ())
    if args and args[0] in _UNIQUE_ERRNOS:
        return True
    message = _driver_message(exc).lower()
    return "unique constraint failed" in message or "duplicate entry" in message


def _translate(db: Session, exc: SQLAlchemyError, action: str) -> StoreError:
    db.rollback()
    if isinstance(exc, IntegrityError) and _is_unique_violation(exc):
        return UniqueViolation(f"{action} violates a unique constraint: {_driver_message(exc)}")
    if isinstance(exc, OperationalError) or (isinstance(exc, DBAPIError) and exc.connection_invalidated):
        return StoreConnectionError(f"{action} failed, database unreachable: {_driver_message(exc)}")
    return StoreError(f"{action} failed: {_driver_message(exc)}")


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc).strip()


def _query(db: Session, model: type[ModelT], criteria: tuple[Any, ...], filters: Mapping[str, Any]):
    q = db.query(model)
    for column, value in filters.items():
        q = q.filter(getattr(model, column) == value)
    if criteria:
        q = q.filter(*criteria)
    return q


def select_rows(db: Session, model: type[ModelT], *criteria: Any, order_by: Any = None, **filters: Any) -> list[ModelT]:
    """Return every row of ``model`` matching the equality ``filters`` and any extra SQL ``criteria``."""

    try:
        q = _query(db, model, criteria, filters)
        if order_by is not None:
            q = q.order_by(order_by)
        return q.all()
    except SQLAlchemyError as exc:
        raise _translate(db, exc, f"select from {model.__tablename__}") from exc


def select_one(db: Session, model: type[ModelT], *criteria: Any, **filters: Any) -> ModelT | None:
    """Zero-or-one lookup; more than one match is a store error."""

    rows = select_rows(db, model, *criteria, **filters)
    if len(rows) > 1:
        raise StoreError(f"select from {model.__tablename__} returned {len(rows)} rows, expected at most one")
    return rows[0] if rows else None


def insert_row(db: Session, model: type[ModelT], values: Mapping[str, Any]) -> ModelT:
    row = model(**values)
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
    except SQLAlchemyError as exc:
        raise _translate(db, exc, f"insert into {model.__tablename__}") from exc
    return row


def insert_rows(db: Session, model: type[ModelT], values: list[Mapping[str, Any]]) -> list[ModelT]:
    rows = [model(**item) for item in values]
    if not rows:
        return []
    try:
        db.add_all(rows)
        db.commit()
        for row in rows:
            db.refresh(row)
    except SQLAlchemyError as exc:
        raise _translate(db, exc, f"insert into {model.__tablename__}") from exc
    return rows


def update_rows(
    db: Session,
    model: type[ModelT],
    filters: Mapping[str, Any],
    patch: Mapping[str, Any],
    *criteria: Any,
) -> list[ModelT]:
    rows = select_rows(db, model, *criteria, **filters)
    try:
        for row in rows:
            for field, value in patch.items():
                setattr(row, field, value)
        db.commit()
        for row in rows:
            db.refresh(row)
    except SQLAlchemyError as exc:
        raise _translate(db, exc, f"update {model.__tablename__}") from exc
    return rows


def update_where(db: Session, model: type[ModelT], filters: Mapping[str, Any], patch: Mapping[str, Any]) -> int:
    """Single UPDATE ... WHERE statement; returns the number of rows the database changed."""

    try:
        updated = _query(db, model, (), filters).update(dict(patch), synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        raise _translate(db, exc, f"update {model.__tablename__}") from exc
    return int(updated or 0)


def upsert_row(db: Session, model: type[ModelT], values: Mapping[str, Any], conflict_key: str) -> ModelT:
    """Insert ``values`` or overwrite the row that already holds ``values[conflict_key]``."""

    if conflict_key not in values:
        raise StoreError(f"upsert into {model.__tablename__} is missing conflict key {conflict_key!r}")
    existing = select_one(db, model, **{conflict_key: values[conflict_key]})
    if existing is None:
        return insert_row(db, model, values)
    try:
        for field, value in values.items():
            setattr(existing, field, value)
        db.commit()
        db.refresh(existing)
    except SQLAlchemyError as exc:
        raise _translate(db, exc, f"upsert into {model.__tablename__}") from exc
    return existing


def delete_rows(db: Session, model: type[ModelT], *criteria: Any, **filters: Any) -> int:
    try:
        deleted = _query(db, model, criteria, filters).delete(synchronize_session=False)
        db.commit()
    except SQLAlchemyError as exc:
        raise _translate(db, exc, f"delete from {model.__tablename__}") from exc
    return int(deleted or 0)
