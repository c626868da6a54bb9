"""
Data models and value objects.
"""

from .target import Target
from .device import Nic, Disk, ServerSnapshot, Discrete, Blade, Chassis

__all__ = ['Target', 'Nic', 'Disk', 'ServerSnapshot', 'Discrete', 'Blade', 'Chassis']
