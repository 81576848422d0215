"""WPA pre-shared key derivation.

Equivalent to ``wpa_passphrase``: PBKDF2-HMAC-SHA1 over the passphrase,
salted with the SSID, 4096 iterations, 32-byte key, lowercase hex.
"""

from __future__ import annotations

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

PSK_ITERATIONS = 4096
PSK_LENGTH = 32


def derive_psk(ssid: str | None, passphrase: str | None) -> str | None:
    """Derive the 64-character hex PSK for an SSID/passphrase pair.

    Returns None when either value is missing or blank after stripping,
    meaning the network is configured open.

    >>> derive_psk("example-SSID", "foobarpassprivate")
    '7190fee2e787b9d4d2ca4b4946d180e646727d9ca1d9adf664f84f85107de5fa'
    >>> derive_psk("example-SSID", "   ") is None
    True
    """
    if not ssid or not ssid.strip() or not passphrase or not passphrase.strip():
        return None

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA1(),
        length=PSK_LENGTH,
        salt=ssid.encode("utf-8"),
        iterations=PSK_ITERATIONS,
    )
    return kdf.derive(passphrase.encode("utf-8")).hex()
