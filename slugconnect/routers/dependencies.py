# dependencies.py
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from slugconnect.database import get_db
from slugconnect.errors import AuthRequired
from slugconnect.models.user import User
from slugconnect.schemas.user import TokenData
from slugconnect.services.auth_service import get_user_by_id, is_token_revoked
from slugconnect.utils.jwt_handler import decode_access_token, token_expiry


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_token_data(db: Session = Depends(get_db), token: str | None = Depends(oauth2_scheme)) -> TokenData:
    if not token:
        raise AuthRequired("Not authenticated")
    payload = decode_access_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise AuthRequired("Invalid token payload")
    token_data = TokenData(user_id=str(user_id), jti=payload.get("jti"), expires_at=token_expiry(payload))
    if is_token_revoked(db, token_data.jti):
        raise AuthRequired("Session has ended. Please sign in again.")
    return token_data


def get_current_user(db: Session = Depends(get_db), token_data: TokenData = Depends(get_token_data)) -> User:
    user = get_user_by_id(db, token_data.user_id)
    if not user:
        raise AuthRequired("User not found")
    return user
