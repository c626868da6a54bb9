"""
BMC Inventory Package

This package provides a normalized accessor surface over vendor BMCs
(Supermicro ipmi.cgi XML, HP Onboard Administrator SOAP, a Redfish
subset) and aggregates it into one device snapshot.

Architecture:
- Strategy Pattern for vendor providers
- Factory Pattern for creating providers
- Facade Pattern for the snapshot service
- Value Object Pattern for vendor documents
"""

from .models import Target, Nic, Disk, ServerSnapshot, Blade, Discrete, Chassis
from .providers import BmcProvider, ServerProvider, ChassisProvider, BmcType, SupermicroXProvider, C7000Provider
from .repositories import ProviderFactory
from .services import SnapshotService
from .formatters import SnapshotFormatter
from . import errors

__all__ = [
    # Models
    "Target",
    "Nic",
    "Disk",
    "ServerSnapshot",
    "Blade",
    "Discrete",
    "Chassis",
    # Providers
    "BmcProvider",
    "ServerProvider",
    "ChassisProvider",
    "BmcType",
    "SupermicroXProvider",
    "C7000Provider",
    # Factory
    "ProviderFactory",
    # Services
    "SnapshotService",
    # Formatters
    "SnapshotFormatter",
    # Errors
    "errors",
]
