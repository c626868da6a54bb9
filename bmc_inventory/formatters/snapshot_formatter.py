"""
Snapshot formatter - Displays one device snapshot.

Output format (list):
Blade: 10.0.0.5 (Supermicro supermicrox)
============================================================
  serial:          abc123
  model:           X10DRT-P
  ...
  nics:
    - bmc     0c:c4:7a:00:00:01
"""

import json
from typing import List, Tuple, Union

from .base_formatter import OutputFormatter
from ..models import Chassis, ServerSnapshot


class SnapshotFormatter(OutputFormatter):
    """
    Formatter for a single server or chassis snapshot.

    Design Pattern: Strategy Pattern implementation
    """

    def __init__(self, output_format: str = "list"):
        """
        Initialize formatter.

        Args:
            output_format: Output format type ('list', 'table', 'json')
        """
        self.output_format = output_format

    def format(self, snapshot: Union[ServerSnapshot, Chassis]) -> str:
        if self.output_format == "json":
            return self._format_json(snapshot)
        elif self.output_format == "table":
            return self._format_table(snapshot)
        else:  # list (default)
            return self._format_list(snapshot)

    @staticmethod
    def _scalar_fields(snapshot: Union[ServerSnapshot, Chassis]) -> List[Tuple[str, object]]:
        data = snapshot.to_dict()
        return [
            (key, value) for key, value in data.items()
            if key not in ("kind", "vendor", "bmc_address", "bmc_type", "nics", "disks")
        ]

    def _format_list(self, snapshot: Union[ServerSnapshot, Chassis]) -> str:
        """Format as an indented key/value list"""
        lines = [
            f"\n{snapshot.kind.capitalize()}: {snapshot.bmc_address} ({snapshot.vendor} {snapshot.bmc_type})",
            "=" * 60,
        ]

        for key, value in self._scalar_fields(snapshot):
            lines.append(f"  {key + ':':<24} {value}")

        lines.append("  nics:")
        if not snapshot.nics:
            lines.append("    (none)")
        for nic in snapshot.nics:
            lines.append(f"    - {nic.name:<7} {nic.mac_address}")

        return "\n".join(lines)

    def _format_table(self, snapshot: Union[ServerSnapshot, Chassis]) -> str:
        """Format as a two-column table"""
        lines = []

        # Header
        lines.append("\n{:<24} {:<50}".format("FIELD", "VALUE"))
        lines.append("=" * 75)

        lines.append("{:<24} {:<50}".format("kind", snapshot.kind))
        lines.append("{:<24} {:<50}".format("vendor", snapshot.vendor))
        lines.append("{:<24} {:<50}".format("bmc_address", snapshot.bmc_address))
        lines.append("{:<24} {:<50}".format("bmc_type", snapshot.bmc_type))

        for key, value in self._scalar_fields(snapshot):
            lines.append("{:<24} {:<50}".format(key, str(value)))

        for nic in snapshot.nics:
            lines.append("{:<24} {:<50}".format(f"nic {nic.name}", nic.mac_address))

        return "\n".join(lines)

    def _format_json(self, snapshot: Union[ServerSnapshot, Chassis]) -> str:
        """Format as JSON"""
        return json.dumps(snapshot.to_dict(), indent=2)
