"""
Vendor wire codecs: request builders and response decoders per dialect.
"""

from . import hpoa_soap, redfish, supermicro_xml

__all__ = ['hpoa_soap', 'redfish', 'supermicro_xml']
