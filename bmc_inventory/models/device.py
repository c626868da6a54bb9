"""
Device snapshot models.

A server snapshot is either a Blade (lives in a chassis) or a Discrete
(standalone rack server). Both share the ServerSnapshot field set; the
aggregator picks the shape once per snapshot.
"""

from dataclasses import dataclass, asdict, field
from typing import List


@dataclass(frozen=True)
class Nic:
    """
    Network interface.

    Attributes:
        name: Logical role ("bmc", "eth0".."eth3")
        mac_address: Lower-cased MAC address
    """
    name: str
    mac_address: str


@dataclass(frozen=True)
class Disk:
    serial: str
    model: str = ""
    size: str = ""
    status: str = ""


@dataclass
class ServerSnapshot:
    """Fields common to every server shape"""
    vendor: str
    bmc_address: str
    bmc_type: str
    serial: str = ""
    bmc_version: str = ""
    model: str = ""
    nics: List[Nic] = field(default_factory=list)
    disks: List[Disk] = field(default_factory=list)
    bios_version: str = ""
    processor: str = ""
    processor_count: int = 0
    processor_core_count: int = 0
    processor_thread_count: int = 0
    memory: int = 0
    status: str = ""
    name: str = ""
    temp_c: int = 0
    power_kw: float = 0.0
    power_state: str = ""
    bmc_licence_type: str = ""
    bmc_licence_status: str = ""

    kind = "server"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind
        return data


@dataclass
class Discrete(ServerSnapshot):
    """Standalone server, no chassis linkage"""
    kind = "discrete"


@dataclass
class Blade(ServerSnapshot):
    """Server housed in a chassis"""
    blade_position: int = 0
    chassis_serial: str = ""

    kind = "blade"


@dataclass
class Chassis:
    """Blade enclosure as reported by its management module"""
    vendor: str
    bmc_address: str
    bmc_type: str
    serial: str = ""
    fw_version: str = ""
    model: str = ""
    name: str = ""
    nics: List[Nic] = field(default_factory=list)
    status: str = ""
    power_kw: float = 0.0

    kind = "chassis"

    def to_dict(self) -> dict:
        data = asdict(self)
        data["kind"] = self.kind
        return data
