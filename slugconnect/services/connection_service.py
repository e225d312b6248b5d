from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

from sqlalchemy import or_
from sqlalchemy.orm import Session

from slugconnect.db.store import (
    StoreError,
    UniqueViolation,
    delete_rows,
    insert_row,
    insert_rows,
    select_one,
    select_rows,
    update_rows,
    update_where,
)
from slugconnect.errors import (
    BackendUnavailable,
    DuplicateRequest,
    NotFound,
    PermissionDenied,
    RequestFailed,
    RequestNotAllowed,
    SelfConnection,
    ValidationError,
)
from slugconnect.models.connection_request import ConnectionRequest, canonical_pair
from slugconnect.models.profile import Profile
from slugconnect.models.user import User
from slugconnect.schemas.connection import (
    AcceptedConnectionItem,
    ConnectionRequestRead,
    ConnectionsOverview,
    ConnectionStatus,
    PendingRequestItem,
)
from slugconnect.schemas.profile import ProfileRead
from slugconnect.services.profile_service import NO_PROFILE_MESSAGE, get_profile, list_other_profiles, profiles_by_ids


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestPair:
    """The (at most) two directed rows between a viewer and a target."""

    outgoing: Any = None
    incoming: Any = None


@dataclass
class SeedResult:
    created: int = 0
    total_users: int = 0
    skipped: int = 0
    users: list[str] = field(default_factory=list)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def derive_status(outgoing: Any = None, incoming: Any = None) -> ConnectionStatus:
    """Map the outgoing/incoming rows of a pair to a display status.

    Precedence: accepted, then rejected (only when the viewer has an outgoing
    row, so they may re-offer), then the viewer's own pending request, then a
    pending request from the target. Outgoing wins when both are pending.
    """

    rows = [row for row in (outgoing, incoming) if row is not None]
    if any(row.status == "accepted" for row in rows):
        return ConnectionStatus.ACCEPTED
    if outgoing is not None and any(row.status == "rejected" for row in rows):
        return ConnectionStatus.REJECTED
    if outgoing is not None:
        return ConnectionStatus.PENDING
    if incoming is not None and incoming.status == "pending":
        return ConnectionStatus.RECEIVED
    return ConnectionStatus.IDLE


def _split_pair(rows: Iterable[ConnectionRequest], viewer_id: str, target_id: str) -> RequestPair:
    outgoing = None
    incoming = None
    for row in rows:
        if row.sender_id == viewer_id and row.receiver_id == target_id and outgoing is None:
            outgoing = row
        elif row.sender_id == target_id and row.receiver_id == viewer_id and incoming is None:
            incoming = row
    return RequestPair(outgoing=outgoing, incoming=incoming)


def fetch_request_pair(db: Session, viewer_id: str, target_id: str) -> RequestPair:
    low, high = canonical_pair(viewer_id, target_id)
    try:
        rows = select_rows(db, ConnectionRequest, pair_low=low, pair_high=high)
    except StoreError as exc:
        logger.warning("connections.fetch viewer=%s target=%s error=%s", viewer_id, target_id, exc)
        raise BackendUnavailable("Connection status unknown. Please try again later.") from exc
    return _split_pair(rows, viewer_id, target_id)


def get_connection_status(db: Session, viewer_id: str, target_id: str) -> ConnectionStatus:
    if viewer_id == target_id:
        raise SelfConnection()
    _ensure_user_exists(db, target_id)
    pair = fetch_request_pair(db, viewer_id, target_id)
    return derive_status(pair.outgoing, pair.incoming)


def _rows_involving(db: Session, user_id: str, **filters: Any) -> list[ConnectionRequest]:
    return select_rows(
        db,
        ConnectionRequest,
        or_(ConnectionRequest.sender_id == user_id, ConnectionRequest.receiver_id == user_id),
        order_by=ConnectionRequest.created_at,
        **filters,
    )


def statuses_for_viewer(db: Session, viewer_id: str) -> dict[str, ConnectionStatus]:
    """Derived status towards every user the viewer has a row with; absent users are idle."""

    try:
        rows = _rows_involving(db, viewer_id)
    except StoreError as exc:
        logger.warning("connections.statuses viewer=%s error=%s", viewer_id, exc)
        raise BackendUnavailable("Connection status unknown. Please try again later.") from exc

    by_target: dict[str, list[ConnectionRequest]] = {}
    for row in rows:
        by_target.setdefault(row.other_party(viewer_id), []).append(row)

    statuses: dict[str, ConnectionStatus] = {}
    for target_id, target_rows in by_target.items():
        pair = _split_pair(target_rows, viewer_id, target_id)
        statuses[target_id] = derive_status(pair.outgoing, pair.incoming)
    return statuses


def _ensure_user_exists(db: Session, user_id: str) -> None:
    try:
        user = select_one(db, User, id=user_id)
    except StoreError as exc:
        raise BackendUnavailable() from exc
    if user is None:
        raise NotFound("User not found")


def _insert_request(db: Session, viewer_id: str, target_id: str) -> ConnectionRequest:
    try:
        return insert_row(db, ConnectionRequest, ConnectionRequest.values_for(viewer_id, target_id))
    except UniqueViolation as exc:
        raise DuplicateRequest() from exc


def _reoffer_request(db: Session, row: ConnectionRequest, viewer_id: str, target_id: str) -> None:
    patch = {**ConnectionRequest.values_for(viewer_id, target_id), "created_at": _utc_now()}
    # Only matches while the row is still rejected; losing that race is a duplicate.
    updated = update_where(db, ConnectionRequest, {"id": row.id, "status": "rejected"}, patch)
    if not updated:
        raise DuplicateRequest()


def submit_request(db: Session, viewer_id: str, target_id: str) -> ConnectionStatus:
    if viewer_id == target_id:
        raise SelfConnection()

    current = get_connection_status(db, viewer_id, target_id)
    if not current.can_send:
        raise RequestNotAllowed(f"Cannot send a connection request while the status is '{current.value}'.")

    # Re-check right before writing; the unique pair constraint is the real guard.
    pair = fetch_request_pair(db, viewer_id, target_id)
    if pair.outgoing is not None and pair.outgoing.status == "pending":
        return ConnectionStatus.PENDING

    existing = pair.outgoing or pair.incoming
    try:
        if existing is None:
            _insert_request(db, viewer_id, target_id)
        elif existing.status == "rejected":
            _reoffer_request(db, existing, viewer_id, target_id)
        else:
            raise DuplicateRequest()
    except DuplicateRequest:
        status = get_connection_status(db, viewer_id, target_id)
        logger.info("connections.submit duplicate viewer=%s target=%s status=%s", viewer_id, target_id, status.value)
        return status
    except StoreError as exc:
        logger.warning("connections.submit viewer=%s target=%s error=%s", viewer_id, target_id, exc)
        raise RequestFailed(f"Failed to send connection request: {exc}") from exc

    logger.info("connections.submit viewer=%s target=%s", viewer_id, target_id)
    return ConnectionStatus.PENDING


def respond_to_request(db: Session, viewer_id: str, request_id: int, action: str) -> ConnectionsOverview:
    if action not in ("accepted", "rejected"):
        raise ValidationError(f"Unsupported action: {action}")
    try:
        row = select_one(db, ConnectionRequest, id=request_id)
    except StoreError as exc:
        raise RequestFailed(f"Failed to update request: {exc}") from exc
    if row is None:
        raise NotFound("Connection request not found")
    if row.receiver_id != viewer_id:
        raise PermissionDenied("Only the receiver can respond to this request")

    try:
        update_rows(db, ConnectionRequest, {"id": request_id}, {"status": action})
    except StoreError as exc:
        logger.warning("connections.respond request=%s action=%s error=%s", request_id, action, exc)
        raise RequestFailed(f"Failed to update request: {exc}") from exc

    logger.info("connections.respond request=%s receiver=%s action=%s", request_id, viewer_id, action)
    return connections_overview(db, viewer_id)


def _profile_read(profile: Profile | None) -> ProfileRead | None:
    return ProfileRead.model_validate(profile) if profile is not None else None


def connections_overview(db: Session, viewer_id: str) -> ConnectionsOverview:
    try:
        pending = select_rows(
            db,
            ConnectionRequest,
            receiver_id=viewer_id,
            status="pending",
            order_by=ConnectionRequest.created_at,
        )
        accepted = _rows_involving(db, viewer_id, status="accepted")
    except StoreError as exc:
        logger.warning("connections.overview viewer=%s error=%s", viewer_id, exc)
        raise BackendUnavailable() from exc

    profiles = profiles_by_ids(db, [row.sender_id for row in pending] + [row.other_party(viewer_id) for row in accepted])

    pending_items = []
    for row in pending:
        sender = profiles.get(row.sender_id)
        pending_items.append(
            PendingRequestItem(
                request=ConnectionRequestRead.model_validate(row),
                sender=_profile_read(sender),
                sender_name=(sender.name if sender and sender.name else "Unknown"),
                sender_major=(sender.major if sender and sender.major else "Unknown"),
            )
        )

    accepted_items = []
    for row in accepted:
        other_id = row.other_party(viewer_id)
        other = profiles.get(other_id)
        accepted_items.append(
            AcceptedConnectionItem(
                request=ConnectionRequestRead.model_validate(row),
                other_user_id=other_id,
                other_user=_profile_read(other),
                other_user_name=(other.name if other and other.name else "Unknown"),
                other_user_major=(other.major if other and other.major else "Unknown"),
            )
        )

    return ConnectionsOverview(pending_requests=pending_items, accepted_connections=accepted_items)


def purge_requests_for_user(db: Session, user_id: str) -> int:
    """Delete every request the user sent or received, whatever its status."""

    try:
        deleted = delete_rows(
            db,
            ConnectionRequest,
            or_(ConnectionRequest.sender_id == user_id, ConnectionRequest.receiver_id == user_id),
        )
    except StoreError as exc:
        raise RequestFailed(f"Failed to delete connection requests: {exc}") from exc
    logger.info("connections.purge user=%s deleted=%d", user_id, deleted)
    return deleted


def seed_requests_to_user(db: Session, receiver_id: str, *, reset: bool = False) -> SeedResult:
    """Create a pending request from every other profile to ``receiver_id``.

    Users already paired with the receiver are skipped unless ``reset`` first
    purges all of the receiver's requests. Timestamps are staggered a minute
    apart so the pending list has a stable order.
    """

    if get_profile(db, receiver_id) is None:
        raise NotFound(NO_PROFILE_MESSAGE)

    others = list_other_profiles(db, receiver_id)
    if not others:
        return SeedResult()

    if reset:
        purge_requests_for_user(db, receiver_id)
        existing: set[str] = set()
    else:
        try:
            existing = {row.other_party(receiver_id) for row in _rows_involving(db, receiver_id)}
        except StoreError as exc:
            raise BackendUnavailable() from exc

    now = _utc_now()
    senders = [profile for profile in others if profile.user_id not in existing]
    values = []
    for index, sender in enumerate(senders):
        item = ConnectionRequest.values_for(sender.user_id, receiver_id)
        item["created_at"] = now - timedelta(minutes=len(senders) - index)
        values.append(item)

    try:
        inserted = insert_rows(db, ConnectionRequest, values)
    except StoreError as exc:
        raise RequestFailed(f"Error creating requests: {exc}") from exc

    result = SeedResult(
        created=len(inserted),
        total_users=len(others),
        skipped=len(others) - len(senders),
        users=[sender.name or "Unknown" for sender in senders],
    )
    logger.info(
        "connections.seed receiver=%s created=%d skipped=%d reset=%s",
        receiver_id,
        result.created,
        result.skipped,
        reset,
    )
    return result
