import logging
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

# Fixed bcrypt cost factor
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)

def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password):
    return pwd_context.hash(password)

def create_access_token(username: str, settings: Settings) -> str:
    # No "exp" claim: tokens stay valid until the signing key changes
    return jwt.encode({"username": username}, settings.jwt_key, algorithm=settings.jwt_algorithm)

def decode_username(token: str, settings: Settings) -> str:
    """Return the username embedded in a token. Raises JWTError if the token is not valid."""
    payload = jwt.decode(token, settings.jwt_key, algorithms=[settings.jwt_algorithm])
    username = payload.get("username")
    if not isinstance(username, str) or not username:
        raise JWTError("token carries no username")
    return username

# auto_error is off so that a missing header maps to 403 like every other auth failure
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_username(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    forbidden = HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Access forbidden.",
    )
    if credentials is None or not credentials.credentials:
        logger.info("Rejected request without bearer token")
        raise forbidden
    try:
        return decode_username(credentials.credentials, settings)
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise forbidden
