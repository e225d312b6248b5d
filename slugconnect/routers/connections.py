# connections.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from slugconnect.database import get_db
from slugconnect.models.user import User
from slugconnect.routers.dependencies import get_current_user
from slugconnect.schemas.connection import ConnectionsOverview, ConnectionStatusRead, RespondRequest, SendRequest
from slugconnect.services.connection_service import (
    connections_overview,
    get_connection_status,
    respond_to_request,
    submit_request,
)


router = APIRouter()


@router.get("", response_model=ConnectionsOverview)
def read_connections(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> ConnectionsOverview:
    return connections_overview(db, current_user.id)


@router.get("/status/{target_id}", response_model=ConnectionStatusRead)
def read_connection_status(
    target_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionStatusRead:
    status = get_connection_status(db, current_user.id, target_id)
    return ConnectionStatusRead.of(target_id, status)


@router.post("/requests", response_model=ConnectionStatusRead)
def send_connection_request(
    payload: SendRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionStatusRead:
    status = submit_request(db, current_user.id, payload.receiver_id)
    return ConnectionStatusRead.of(payload.receiver_id, status)


@router.post("/requests/{request_id}/respond", response_model=ConnectionsOverview)
def respond_connection_request(
    request_id: int,
    payload: RespondRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ConnectionsOverview:
    return respond_to_request(db, current_user.id, request_id, payload.action)
