"""
Zone clock adapter - Implements Clock protocol.

All timestamps the service produces are in one configured time zone.
"""

from datetime import datetime
from zoneinfo import ZoneInfo


class ZoneClock:
    """
    Implements Clock protocol with the system time in a fixed zone.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, zone: str) -> None:
        """
        Args:
            zone: IANA zone name, e.g. "Europe/Amsterdam"
        """
        self.zone = ZoneInfo(zone)

    def now(self) -> datetime:
        return datetime.now(self.zone)
