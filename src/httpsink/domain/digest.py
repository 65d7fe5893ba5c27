"""Content digests used for drift detection."""

from __future__ import annotations

import hashlib


def compute_digest(content: str | bytes) -> str:
    """Return the hex SHA-1 digest of ``content`` (strings are UTF-8 encoded).

    The digest only detects drift between stored and remote content; it carries
    no integrity or security guarantee.
    """

    data = content.encode("utf-8") if isinstance(content, str) else content
    return hashlib.sha1(data, usedforsecurity=False).hexdigest()


def digests_equal(left: str, right: str) -> bool:
    return left == right
