"""
Parser utilities for normalizing vendor-reported values.
"""

from .processor_parser import ProcessorParser
from .mac_parser import MacParser

__all__ = ['ProcessorParser', 'MacParser']
