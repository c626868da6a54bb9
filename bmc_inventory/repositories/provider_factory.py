"""
Provider Factory - Factory Pattern implementation.
Creates BMC provider instances based on BMC type.
"""

import logging
from typing import Dict, Optional, Type, Union

import requests

from ..models import Target
from ..providers import BmcProvider, BmcType, SupermicroXProvider, C7000Provider

logger = logging.getLogger(__name__)


class ProviderFactory:
    """
    Factory for creating BMC provider instances.

    Design Pattern: Factory Pattern + Registry Pattern
    Registers all available providers and creates instances on demand.
    """

    # Provider registry
    _PROVIDERS: Dict[BmcType, Type[BmcProvider]] = {
        BmcType.SUPERMICROX: SupermicroXProvider,
        BmcType.C7000: C7000Provider,
    }

    @classmethod
    def create_provider(cls, bmc_type: Union[BmcType, str], target: Target, timeout: int = 30,
                        always_login: bool = False, http: Optional[requests.Session] = None) -> BmcProvider:
        """
        Create a BMC provider instance.

        Args:
            bmc_type: Type of BMC, as enum or its value ("supermicrox")
            target: BMC to talk to
            timeout: Per-request timeout in seconds
            always_login: Log in before every call
            http: Optional pre-built transport

        Returns:
            Provider instance (not yet logged in)

        Raises:
            ValueError: If BMC type is not supported
        """
        if isinstance(bmc_type, str):
            try:
                bmc_type = BmcType(bmc_type.lower())
            except ValueError:
                raise ValueError(f"Unknown BMC type: {bmc_type}") from None

        provider_class = cls._PROVIDERS.get(bmc_type)

        if not provider_class:
            raise ValueError(f"Unknown BMC type: {bmc_type}")

        logger.debug(f"Creating provider for BMC type: {bmc_type.value}")
        return provider_class(target, timeout=timeout, always_login=always_login, http=http)

    @classmethod
    def get_supported_types(cls) -> list[BmcType]:
        """
        Get list of supported BMC types.

        Returns:
            List of supported BmcType values
        """
        return list(cls._PROVIDERS.keys())

    @classmethod
    def register_provider(cls, bmc_type: BmcType, provider_class: Type[BmcProvider]):
        """
        Register a new provider (for extensibility).

        Args:
            bmc_type: BMC type
            provider_class: Provider class to register
        """
        cls._PROVIDERS[bmc_type] = provider_class
        logger.info(f"Registered provider for BMC type: {bmc_type.value}")
