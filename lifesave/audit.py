"""
Privacy-preserving interaction audit for the LifeSave health assistant.

User text and assistant replies are reduced to SHA-256 digests (keyed with
HMAC when APP_SECRET is set) before anything touches the database.
"""

import hashlib
import hmac
import logging
from typing import Optional

from . import config
from .db import SessionLocal, create_interaction_log

logger = logging.getLogger(__name__)


def get_secret_key() -> Optional[str]:
    """Return the configured APP_SECRET, or None when it is unset or blank."""
    secret = config.APP_SECRET
    if not secret or not secret.strip():
        return None
    return secret


def sha256_hex(data: str) -> str:
    if not isinstance(data, str):
        raise TypeError("Input data must be a string")
    return hashlib.sha256(data.encode('utf-8')).hexdigest()


def hmac256_hex(data: str, secret_key: str) -> str:
    if not isinstance(data, str):
        raise TypeError("Input data must be a string")
    return hmac.new(secret_key.encode('utf-8'), data.encode('utf-8'), hashlib.sha256).hexdigest()


def fingerprint(data: str, secret_key: Optional[str] = None) -> str:
    """
    Hash text for storage.

    Uses HMAC-SHA256 with ``secret_key`` (or APP_SECRET) when available and
    plain SHA-256 otherwise. Both produce a 64 character hex digest.
    """
    key = secret_key or get_secret_key()
    if key:
        return hmac256_hex(data, key)
    return sha256_hex(data)


def log_interaction(channel: str, user_text: str, reply: str,
                    urgency: Optional[str] = None) -> bool:
    """
    Store a hashed interaction, returning whether it was written.

    Failures are logged and swallowed so auditing never breaks a request.
    """
    if not config.INTERACTION_LOGGING:
        return False

    try:
        db = SessionLocal()
        try:
            create_interaction_log(
                db,
                channel=channel,
                hashed_query=fingerprint(user_text),
                hashed_response=fingerprint(reply),
                urgency=urgency,
            )
        finally:
            db.close()
        return True
    except Exception as e:
        logger.warning("Failed to log %s interaction: %s", channel, e)
        return False
