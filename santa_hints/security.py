from __future__ import annotations

import logging
import secrets

from flask import current_app
from passlib.context import CryptContext


logger = logging.getLogger(__name__)

CODE_BYTES = 3
PASSWORD_MAX_LENGTH = 100


# argon2 for new hashes; bare hex SHA-256 digests are still accepted so an
# existing ADMIN_PASS_HASH keeps working.
pwd_context = CryptContext(
    schemes=["argon2", "hex_sha256"],
    deprecated="auto",
)


def generate_code() -> str:
    """Random access code: 3 bytes rendered as 6 lowercase hex characters."""
    return secrets.token_hex(CODE_BYTES)


def hash_admin_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_admin_password(password: str) -> bool:
    stored_hash = (current_app.config.get("ADMIN_PASS_HASH") or "").strip()
    if not stored_hash:
        logger.warning("Admin login attempted but ADMIN_PASS_HASH is not configured")
        return False

    try:
        return pwd_context.verify(password, stored_hash)
    except ValueError:
        # Unrecognised hash format in configuration.
        logger.error("ADMIN_PASS_HASH is not a supported hash format")
        return False
