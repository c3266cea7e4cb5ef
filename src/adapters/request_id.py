"""
Request id adapter - Implements RequestIdGenerator protocol.

Request ids are random 64-bit values rendered as lowercase hexadecimal
without leading zeros.
"""

import secrets


class RandomHexRequestIdGenerator:
    """
    Implements RequestIdGenerator protocol via the secrets module.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def generate(self) -> str:
        """Return a cryptographically random 64-bit hex request id."""
        return format(secrets.randbits(64), "x")
