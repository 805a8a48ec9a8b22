"""
Shared-secret authentication for the exam schedule editor.

A correct admin password buys a signed token valid for a limited time:

    admin:<expiry in epoch milliseconds>.<hex HMAC-SHA256 of "admin:<expiry>">

This is the whole protocol. There are no user accounts.
"""

import hashlib
import hmac
import time

import structlog

from gestation.config import AuthConfig
from gestation.domain.models import AdminToken
from gestation.services.result import AuthenticationError, Result

logger = structlog.get_logger(__name__)

MS_PER_HOUR = 60 * 60 * 1000


def now_ms() -> int:
    return int(time.time() * 1000)


def signing_secret(config: AuthConfig) -> str | None:
    """The token secret, or the first admin password when no secret is configured."""
    if config.token_secret:
        return config.token_secret
    return config.admin_passwords[0] if config.admin_passwords else None


def sign(payload: str, secret: str) -> str:
    return hmac.new(secret.encode(), payload.encode(), hashlib.sha256).hexdigest()


def issue_token(
    password: str | None, config: AuthConfig, current_ms: int | None = None
) -> Result[AdminToken, AuthenticationError]:
    """Check the password and, when it matches, return a fresh token."""
    if not password:
        return Result.err(AuthenticationError("Password not provided."))

    secret = signing_secret(config)
    if not config.admin_passwords or secret is None:
        logger.error("admin_auth_not_configured")
        return Result.err(AuthenticationError("Authentication is not configured."))

    if not any(
        hmac.compare_digest(password.encode(), valid.encode())
        for valid in config.admin_passwords
    ):
        logger.warning("admin_login_failed")
        return Result.err(AuthenticationError("Incorrect password."))

    issued_at = now_ms() if current_ms is None else current_ms
    expires_at = issued_at + config.token_ttl_hours * MS_PER_HOUR
    token = AdminToken(expires_at_ms=expires_at, signature=sign(f"admin:{expires_at}", secret))
    logger.info("admin_token_issued", expires_at_ms=expires_at)
    return Result.ok(token)


def parse_token(token: str | None) -> AdminToken | None:
    """Split a token string into its parts; None when it is malformed."""
    if not token:
        return None

    payload, separator, signature = token.partition(".")
    subject, colon, expiry = payload.partition(":")
    if not separator or not colon or subject != "admin" or not signature:
        return None
    if not expiry.isdigit() or int(expiry) == 0:
        return None
    return AdminToken(expires_at_ms=int(expiry), signature=signature)


def verify_token(token: str | None, secret: str, current_ms: int | None = None) -> bool:
    """True for a well-formed, unexpired token signed with ``secret``."""
    parsed = parse_token(token)
    if parsed is None:
        return False

    checked_at = now_ms() if current_ms is None else current_ms
    if checked_at > parsed.expires_at_ms:
        logger.info("admin_token_expired", expires_at_ms=parsed.expires_at_ms)
        return False

    return hmac.compare_digest(parsed.signature.encode(), sign(parsed.payload, secret).encode())
