"""SHA-256 and HMAC-SHA-256 wrappers used by the fairness engine."""

import hashlib
import hmac
import secrets

from fairmines.exceptions import CryptoProviderError


def sha256_hex(text: str) -> str:
    """
    Hash the UTF-8 encoding of a string.

    Args:
        text: Input string

    Returns:
        Lowercase hex SHA-256 digest

    Raises:
        CryptoProviderError: If the digest cannot be computed
    """
    try:
        return hashlib.sha256(text.encode("utf-8")).hexdigest()
    except (AttributeError, TypeError, ValueError) as e:
        raise CryptoProviderError(f"SHA-256 digest failed: {e}") from e


def hmac_sha256(key: str, message: str) -> bytes:
    """
    Compute HMAC-SHA-256 keyed with the UTF-8 encoding of ``key``.

    Args:
        key: Secret key (the hex server seed)
        message: Message to authenticate

    Returns:
        32-byte MAC

    Raises:
        CryptoProviderError: If the MAC cannot be computed
    """
    try:
        return hmac.new(key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
    except (AttributeError, TypeError, ValueError) as e:
        raise CryptoProviderError(f"HMAC-SHA-256 failed: {e}") from e


def random_hex(num_bytes: int) -> str:
    """Return ``num_bytes`` of CSPRNG output as a hex string."""
    return secrets.token_hex(num_bytes)
