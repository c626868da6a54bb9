"""
Services - snapshot aggregation over a provider.
"""

from .snapshot_service import SnapshotService

__all__ = ['SnapshotService']
