"""
BMC provider implementations.
Each vendor dialect implements the normalized capability interface.
"""

from .base_provider import BmcProvider, ServerProvider, ChassisProvider, BmcType
from .supermicrox_provider import SupermicroXProvider, SupermicroSession
from .c7000_provider import C7000Provider, HpoaSession

__all__ = [
    'BmcProvider',
    'ServerProvider',
    'ChassisProvider',
    'BmcType',
    'SupermicroXProvider',
    'SupermicroSession',
    'C7000Provider',
    'HpoaSession',
]
