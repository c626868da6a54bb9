"""
MAC address parser.
"""

import re
from typing import Optional


class MacParser:
    """Recognizes and normalizes MAC addresses"""

    # MAC address pattern (various formats)
    MAC_PATTERN = re.compile(
        r'^([0-9A-Fa-f]{2}[:-]){5}([0-9A-Fa-f]{2})$|^([0-9A-Fa-f]{12})$'
    )

    @classmethod
    def is_mac_address(cls, value: Optional[str]) -> bool:
        """
        Check if a string is a MAC address.

        Args:
            value: String to check

        Returns:
            True if value is a MAC address
        """
        if not value:
            return False
        return bool(cls.MAC_PATTERN.match(value.strip()))

    @classmethod
    def normalize(cls, value: Optional[str]) -> str:
        """Lower-case and trim a MAC; empty input gives an empty string"""
        return (value or "").strip().lower()
