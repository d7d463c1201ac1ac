"""
Password hashing and access tokens.

Passwords are hashed with bcrypt; access tokens are HS256 JWTs signed with
``JWT_SECRET_KEY`` and carry the user id in ``sub`` and the role in ``role``.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
from jose import JWTError, jwt

from constituency_hub.core.exceptions import AuthenticationError
from constituency_hub.server.core.config import settings


def get_password_hash(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.security.bcrypt_rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8")[:72], hashed_password.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    security = settings.security
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=security.access_token_expire_minutes))
    payload = {"sub": subject, "role": role, "exp": expire, "type": "access"}
    return jwt.encode(payload, security.jwt_secret_key, algorithm=security.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    security = settings.security
    try:
        payload = jwt.decode(token, security.jwt_secret_key, algorithms=[security.jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Could not validate credentials")
    if payload.get("type") != "access" or not payload.get("sub"):
        raise AuthenticationError("Could not validate credentials")
    return payload
