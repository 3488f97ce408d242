import logging
from datetime import datetime, timezone, timedelta
from typing import Tuple

from fastapi import HTTPException, Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError

from clubmanager.config import config

logger = logging.getLogger(__name__)

DEV_TOKEN = "dev_token"
DEV_ADMIN_ID = "dev-admin"

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

oauth2_scheme_access = OAuth2PasswordBearer(tokenUrl="auth/refresh-token")


def verify_jwt_token(token: str = Depends(oauth2_scheme_access)):
    """
    Verify JWT access token for correctness and expiration time.

    Returns the caller as ``{"email", "role", "id"}``; the id is a trainer id
    for ADMIN/TRAINER tokens and an athlete id for ATHLETE tokens.
    """
    if config.ENVIRONMENT == "dev" and token == DEV_TOKEN:
        return {"email": config.DEV_ADMIN_EMAIL, "role": "ADMIN", "id": DEV_ADMIN_ID}

    try:
        payload = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.error(f"JWT verification error: {str(e)}")
        raise HTTPException(status_code=401, detail="Token is invalid or expired")

    exp = payload.get("exp")
    if exp is None:
        raise HTTPException(status_code=401, detail="Missing 'exp' field in token")

    if datetime.fromtimestamp(exp, tz=timezone.utc) < datetime.now(tz=timezone.utc):
        raise HTTPException(status_code=401, detail="Token has expired")

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise HTTPException(status_code=401, detail="Not an access token")

    if "role" not in payload or "id" not in payload:
        raise HTTPException(status_code=401, detail="Token is missing role or id")

    logger.debug(f"Token payload: {payload}")
    return {"email": payload.get("sub"), "role": payload["role"], "id": payload["id"]}


def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    """
    Create a new JWT access token.
    """
    expires_delta = expires_delta or timedelta(minutes=config.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(data, ACCESS_TOKEN_TYPE, expires_delta)


def create_refresh_token(data: dict, expires_delta: timedelta = None) -> str:
    expires_delta = expires_delta or timedelta(days=config.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode(data, REFRESH_TOKEN_TYPE, expires_delta)


def _encode(data: dict, token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta, "type": token_type})
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def refresh_tokens(token: str) -> Tuple[str, str]:
    """
    Exchange a refresh token for a new access and refresh token pair.
    """
    try:
        payload = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError as e:
        logger.error(f"Error during refresh token validation: {e}")
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token.")

    exp = payload.get("exp")
    if exp is None or datetime.fromtimestamp(exp, tz=timezone.utc) < datetime.now(tz=timezone.utc):
        raise HTTPException(status_code=401, detail="Refresh token has expired")

    if payload.get("type") != REFRESH_TOKEN_TYPE:
        raise HTTPException(status_code=401, detail="Not a refresh token")

    data = {"sub": payload.get("sub"), "id": payload.get("id"), "role": payload.get("role")}
    return create_access_token(data), create_refresh_token(data)
