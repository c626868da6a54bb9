"""
Processor name parser.

Vendors report the same CPU with different decorations:
- "Intel(R) Xeon(R) CPU E5-2630 v3 @ 2.40GHz"
- "Intel(R) Xeon(R) CPU E5-2630 v3 @ 2.40GHz 0"
- "  Intel(R) Xeon(R) Gold 6140 CPU  "
All are reduced to the lower-cased model part before the clock speed.
"""

from typing import Optional


class ProcessorParser:
    """Standardizes processor names across vendors"""

    @classmethod
    def standardize_name(cls, name: Optional[str]) -> str:
        """
        Standardize a processor name.

        Args:
            name: Raw processor name as reported by the BMC

        Returns:
            Lower-cased name without the "@ <clock>" part

        Examples:
            >>> ProcessorParser.standardize_name('Intel(R) Xeon(R) CPU E5-2630 v3 @ 2.40GHz')
            'intel(r) xeon(r) cpu e5-2630 v3'
            >>> ProcessorParser.standardize_name('Intel(R) Xeon(R) Gold 6140 CPU 0')
            'intel(r) xeon(r) gold 6140 cpu'
        """
        if not name:
            return ""
        model = name.split("@")[0].strip()
        if model.endswith(" 0"):
            model = model[:-2]
        return model.lower()

    @classmethod
    def parse_count(cls, value: Optional[str]) -> int:
        """
        Parse a numeric count attribute ("8", " 12 ").

        Raises:
            ValueError: value is not an integer
        """
        return int((value or "").strip())
