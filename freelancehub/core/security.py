"""Security utilities for identity-provider session tokens."""

from datetime import datetime, timedelta, timezone

import jwt

from freelancehub.core.config import settings


# Profile claims copied onto the user row on every login
PROFILE_CLAIMS = ("email", "first_name", "last_name", "profile_image_url")


def create_session_token(
    subject: str,
    *,
    email: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
    profile_image_url: str | None = None,
    expires_in: timedelta | None = None,
) -> str:
    """
    Create signed session JWT.

    In production the identity provider mints these; this helper is used by
    local tooling and tests. Always signs with the current secret.
    """
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": now,
        "exp": now + (expires_in or timedelta(hours=settings.JWT_EXPIRES_HOURS)),
    }
    claims = {
        "email": email,
        "first_name": first_name,
        "last_name": last_name,
        "profile_image_url": profile_image_url,
    }
    payload.update({k: v for k, v in claims.items() if v is not None})
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str) -> dict:
    """
    Decode and verify session JWT.

    Tries current secret first, then previous (for rotation support).

    Raises:
        jwt.InvalidTokenError: If token invalid with all secrets
    """
    last_error = None
    for secret in settings.jwt_secrets:
        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[settings.JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except jwt.InvalidTokenError as e:
            last_error = e
            continue
        if not isinstance(payload.get("sub"), str) or not payload["sub"]:
            raise jwt.InvalidTokenError("Token subject missing")
        return payload
    raise last_error  # type: ignore


def extract_profile_claims(payload: dict) -> dict:
    """Return the profile claims present in a decoded token."""
    return {key: payload[key] for key in PROFILE_CLAIMS if key in payload}
