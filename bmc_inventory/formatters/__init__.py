"""
Output formatters for displaying snapshots.
"""

from .base_formatter import OutputFormatter
from .snapshot_formatter import SnapshotFormatter

__all__ = ['OutputFormatter', 'SnapshotFormatter']
