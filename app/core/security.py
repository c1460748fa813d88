"""
Token handling
Bearer tokens are HS256 JWTs signed with the shared SECRET_KEY
"""
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from app.config import Settings, get_settings


class Principal(BaseModel):
    """Signed-in identity as asserted by the identity provider"""
    uid: str
    email: Optional[str] = None
    display_name: Optional[str] = None


class InvalidToken(Exception):
    """Token is malformed, expired, or carries no subject"""


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None,
                        settings: Optional[Settings] = None) -> str:
    """Create JWT access token"""
    settings = settings or get_settings()
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def token_for(principal: Principal, expires_delta: Optional[timedelta] = None,
              settings: Optional[Settings] = None) -> str:
    claims = {"sub": principal.uid, "email": principal.email, "name": principal.display_name}
    return create_access_token({k: v for k, v in claims.items() if v is not None}, expires_delta, settings)


def decode_principal(token: str, settings: Optional[Settings] = None) -> Principal:
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError as e:
        raise InvalidToken(str(e)) from e

    uid = payload.get("sub")
    if not uid:
        raise InvalidToken("Token has no subject")
    return Principal(uid=uid, email=payload.get("email"), display_name=payload.get("name"))
