from __future__ import annotations

import logging
from typing import Optional

import jwt

from stockroom.config import get_settings
from stockroom.core.errors import AuthenticationError


logger = logging.getLogger(__name__)


def _get_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _decode_jwt(token: str) -> dict:
    settings = get_settings()
    if not settings.JWT_SECRET:
        logger.error("JWT_SECRET is not configured; rejecting bearer token.")
        raise AuthenticationError("JWT auth is not configured")

    options = {"verify_aud": bool(settings.JWT_AUDIENCE), "require": ["sub"]}
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options=options,
        )
    except jwt.PyJWTError as exc:
        logger.info("Token verification failed: %s", type(exc).__name__)
        raise AuthenticationError("Invalid or expired token") from exc


def resolve_tenant_id(authorization: Optional[str]) -> str:
    """Resolve the caller's tenant id from an ``Authorization`` header.

    The identity provider issues signed JWTs whose ``sub`` claim is the user
    id. The repository only ever sees the resolved id.
    """
    token = _get_bearer_token(authorization)
    if not token:
        raise AuthenticationError("Authentication required")

    payload = _decode_jwt(token)
    tenant_id = str(payload.get("sub") or "").strip()
    if not tenant_id:
        raise AuthenticationError("Token has no subject")
    return tenant_id


__all__ = ["resolve_tenant_id"]
