"""Content fingerprinting for change detection."""

from __future__ import annotations

import base64
import hashlib

#: Length of a digest produced by :func:`compute_hash` (base64 of 32 bytes).
HASH_LENGTH = 44


def compute_hash(content: str) -> str:
    """Compute the SHA-256 fingerprint of *content*.

    The content is hashed verbatim as UTF-8; callers are responsible for
    producing it in a deterministic order (e.g. sorted file concatenation).

    Parameters
    ----------
    content : str
        The full concatenated package content.

    Returns
    -------
    str
        44-character base64 encoding of the 256-bit digest.
    """
    digest = hashlib.sha256(content.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")
