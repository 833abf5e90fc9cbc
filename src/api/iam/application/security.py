"""Security utilities for access tokens and passwords.

Provides secure secret generation, hashing, and verification.
Uses cryptographically secure random generation and bcrypt for hashing.
"""

import secrets

import bcrypt

ACCESS_TOKEN_PREFIX = "adm_"

# bcrypt refuses secrets longer than this many UTF-8 bytes.
BCRYPT_MAX_BYTES = 72


def generate_access_token() -> str:
    """Generate a URL-safe access token with adm_ prefix.

    Generates 40 bytes of cryptographically secure random data
    and encodes it as a URL-safe base64 string with the adm_ prefix,
    which makes leaked tokens easy to spot in logs and secret scanners.

    Returns:
        A URL-safe token string (e.g., adm_abc123...)
    """
    # replace - with _ so the token is selected as one word when copied
    random_part = secrets.token_urlsafe(40).replace("-", "_")
    return f"{ACCESS_TOKEN_PREFIX}{random_part}"


def extract_prefix(token: str) -> str:
    """Extract the first 12 characters as prefix for lookup.

    The prefix is stored alongside the hash to enable quick lookup
    without needing to hash the full token for every comparison.

    Args:
        token: The full plaintext token

    Returns:
        The first 12 characters of the token
    """
    return token[:12]


def hash_secret(secret: str) -> str:
    """Hash a token or password using bcrypt.

    Uses bcrypt with automatic salt generation. The work factor is
    determined by bcrypt's gensalt().

    Args:
        secret: The plaintext to hash

    Returns:
        The bcrypt hash as a string
    """
    return bcrypt.hashpw(secret.encode(), bcrypt.gensalt()).decode()


def verify_secret(secret: str, secret_hash: str) -> bool:
    """Verify a plaintext against its hash using constant-time comparison.

    Args:
        secret: The plaintext to verify
        secret_hash: The bcrypt hash to verify against

    Returns:
        True if the plaintext matches the hash, False otherwise
    """
    try:
        return bcrypt.checkpw(secret.encode(), secret_hash.encode())
    except ValueError:
        # Invalid hash format
        return False


hash_password = hash_secret
verify_password = verify_secret
