"""
BMC target model.
Identity and credentials of one Baseboard Management Controller.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


@dataclass
class Target:
    """
    One BMC endpoint.

    Unlike the snapshot records this is deliberately mutable: credentials
    can be rotated after construction with update_credentials().

    Attributes:
        host: BMC address (IP or hostname, no scheme)
        username: Login user
        password: Login password
        secure_tls: Verify the BMC certificate
        ca_bundle: Optional PEM bundle used instead of the system trust store
    """
    host: str
    username: str
    password: str = field(repr=False)
    secure_tls: bool = False
    ca_bundle: Optional[str] = None

    def __post_init__(self):
        """Validate invariants"""
        if not self.host:
            raise ValueError("BMC host cannot be empty")

    @property
    def base_url(self) -> str:
        return f"https://{self.host}"

    @property
    def verify(self) -> Union[bool, str]:
        """Value for requests' ``verify`` argument"""
        if not self.secure_tls:
            return False
        return self.ca_bundle or True

    def update_credentials(self, username: str, password: str) -> None:
        self.username = username
        self.password = password
