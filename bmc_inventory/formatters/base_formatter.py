"""
Base output formatter - Abstract base class for formatters.
"""

from abc import ABC, abstractmethod
from typing import Union

from ..models import Chassis, ServerSnapshot


class OutputFormatter(ABC):
    """
    Abstract base class for output formatters.

    Design Pattern: Strategy Pattern
    Different formatters for different output styles (list, table, JSON).
    """

    @abstractmethod
    def format(self, snapshot: Union[ServerSnapshot, Chassis]) -> str:
        """
        Format a device snapshot for output.

        Args:
            snapshot: Snapshot to format

        Returns:
            Formatted string for output
        """
        pass
