"""
Base BMC provider - the normalized capability interface.

Each vendor dialect implements these accessors; vendor document shapes
never leave the provider.
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Tuple

from ..models import Target, Nic, Disk
from ..session_manager import BmcSession

logger = logging.getLogger(__name__)


class BmcType(Enum):
    """Supported BMC dialects"""
    SUPERMICROX = "supermicrox"
    C7000 = "c7000"


class BmcProvider(ABC):
    """
    Abstract base class for all BMC providers.

    Responsibilities:
    - Own the session to one Target
    - Expose identity and health accessors shared by servers and chassis

    Not thread-safe: one provider instance belongs to one caller.
    """

    VENDOR: str = ""
    BMC_TYPE: BmcType

    def __init__(self, target: Target, session: BmcSession):
        self.target = target
        self.session = session

    @property
    def vendor(self) -> str:
        return self.VENDOR

    @property
    def bmc_type(self) -> str:
        return self.BMC_TYPE.value

    def check_credentials(self) -> None:
        """
        Verify the credentials by logging in.

        Raises:
            AuthenticationError: The BMC refused the login
        """
        self.session.invalidate()
        self.session.ensure_session()

    def update_credentials(self, username: str, password: str) -> None:
        """Replace the credentials; the next call logs in with them"""
        self.target.update_credentials(username, password)
        self.session.invalidate()

    @abstractmethod
    def serial(self) -> str:
        """Lower-cased device serial"""
        pass

    @abstractmethod
    def model(self) -> str:
        pass

    @abstractmethod
    def version(self) -> str:
        """BMC firmware version"""
        pass

    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def status(self) -> str:
        """Either OK or Unhealthy"""
        pass

    @abstractmethod
    def power_kw(self) -> float:
        pass

    @abstractmethod
    def nics(self) -> List[Nic]:
        pass

    def close(self) -> None:
        """Log out and release the transport"""
        self.session.close()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.close()


class ServerProvider(BmcProvider):
    """BMC of a compute node, discrete or blade"""

    @abstractmethod
    def is_blade(self) -> bool:
        pass

    @abstractmethod
    def slot(self) -> int:
        """1-based position inside the chassis"""
        pass

    @abstractmethod
    def chassis_serial(self) -> str:
        pass

    @abstractmethod
    def bios_version(self) -> str:
        pass

    @abstractmethod
    def cpu(self) -> Tuple[str, int, int, int]:
        """Returns (processor name, socket count, core count, thread count)"""
        pass

    @abstractmethod
    def memory(self) -> int:
        """Installed memory in GiB"""
        pass

    @abstractmethod
    def temp_c(self) -> int:
        pass

    @abstractmethod
    def power_state(self) -> str:
        pass

    @abstractmethod
    def license(self) -> Tuple[str, str]:
        """Returns (licence name, licence status)"""
        pass

    @abstractmethod
    def disks(self) -> List[Disk]:
        pass

    def hardware_type(self) -> str:
        """Hardware type of the device; errors propagate"""
        return self.model()


class ChassisProvider(BmcProvider):
    """Management module of a blade enclosure"""
