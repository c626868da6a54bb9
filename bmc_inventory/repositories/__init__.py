"""
Repositories and factories - Factory Pattern implementation.
"""

from .provider_factory import ProviderFactory

__all__ = ['ProviderFactory']
