"""
BMC error taxonomy.

Every provider raises one of these (or lets a requests transport error
propagate unchanged) so callers can tell apart a missing feature, an
unreadable payload and a hard failure.
"""

from typing import Optional


class BmcError(Exception):
    """Base exception for BMC operations"""

    def __init__(self, message: str, error_code: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(self.message)


class AuthenticationError(BmcError):
    """Raised when the BMC refuses or cannot complete a login"""


class PageNotFoundError(BmcError):
    """Raised when a path-style endpoint answers 404"""

    def __init__(self, url: str):
        super().__init__(f"Page not found: {url}", status_code=404)
        self.url = url


class DecodeError(BmcError):
    """Raised when a response body is not valid XML/JSON"""


class InvalidDataError(BmcError):
    """Raised when an expected sub-document is missing from a valid response"""


class InvalidSerialError(InvalidDataError):
    """Raised when the device serial cannot be read"""

    def __init__(self, message: str = "Unable to read the device serial"):
        super().__init__(message)


class UnableToReadDataError(InvalidDataError):
    """Raised when required data is absent from the BMC answer"""

    def __init__(self, message: str = "Unable to read data from the BMC"):
        super().__init__(message)


class NotImplementedByProviderError(BmcError):
    """Raised for operations this client deliberately does not implement"""

    def __init__(self, operation: str):
        super().__init__(f"{operation} is not implemented for this provider", error_code="NOT_IMPLEMENTED")
        self.operation = operation


class RedfishError(BmcError):
    """Raised when a Redfish response carries an error object"""


class SoapFaultError(BmcError):
    """Raised when an HPOA SOAP response is a Fault"""


class SnapshotError(BmcError):
    """Raised by the snapshot aggregator when one accessor fails"""

    def __init__(self, accessor: str, cause: Exception):
        super().__init__(f"{accessor}() failed: {cause}")
        self.accessor = accessor
        self.cause = cause
