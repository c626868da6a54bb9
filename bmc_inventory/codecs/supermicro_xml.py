"""
Supermicro ipmi.cgi XML codec.

The BMC answers every ``<QUERY>.XML=(x,y)`` POST with an ``<IPMI>`` root
holding only the sub-elements of that query family. Absent sub-trees are
decoded as None and callers must check before reading them.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import DecodeError

# Query keys posted verbatim to /cgi/ipmi.cgi
FRU_INFO = "FRU_INFO.XML=(0,0)"
GENERIC_INFO = "GENERIC_INFO.XML=(0,0)"
CONFIG_INFO = "CONFIG_INFO.XML=(0,0)"
HEALTH_INFO = "SENSOR_INFO_FOR_SYS_HEALTH.XML=(1,ff)"
SMBIOS_INFO = "SMBIOS_INFO.XML=(0,0)"
NODE_INFO = "Get_NodeInfoReadings.XML=(0,0)"
POWER_INFO = "POWER_INFO.XML=(0,0)"
PLATFORM_INFO = "Get_PlatformInfo.XML=(0,0)"
BIOS_LICENSE = "BIOS_LINCENSE_ACTIVATE.XML=(0,0)"


@dataclass(frozen=True)
class Bios:
    version: str


@dataclass(frozen=True)
class Cpu:
    version: str
    core: str


@dataclass(frozen=True)
class Dimm:
    size: str


@dataclass(frozen=True)
class Board:
    serial_num: str
    part_num: str


@dataclass(frozen=True)
class FruInfo:
    board: Optional[Board]


@dataclass(frozen=True)
class Generic:
    bmc_mac: str
    ipmi_fw_version: str


@dataclass(frozen=True)
class GenericInfo:
    """X11 boards put the attributes on GENERIC_INFO, X10 on a GENERIC child"""
    bmc_mac: str
    ipmi_fw_version: str
    generic: Optional[Generic]


@dataclass(frozen=True)
class ConfigInfo:
    hostname: Optional[str]


@dataclass(frozen=True)
class HealthInfo:
    health: str


@dataclass(frozen=True)
class PowerInfo:
    status: str


@dataclass(frozen=True)
class Node:
    id: int
    node_serial: str
    power: str
    system_temp: str


@dataclass(frozen=True)
class NodeInfo:
    nodes: Tuple[Node, ...]


@dataclass(frozen=True)
class PlatformInfo:
    mb_mac_addrs: Tuple[str, ...]


@dataclass(frozen=True)
class BiosLicense:
    check: str


@dataclass(frozen=True)
class IpmiDocument:
    """Decoded ``<IPMI>`` answer; one instance per query"""
    bios: Optional[Bios] = None
    cpus: Tuple[Cpu, ...] = ()
    dimms: Tuple[Dimm, ...] = ()
    fru_info: Optional[FruInfo] = None
    generic_info: Optional[GenericInfo] = None
    config_info: Optional[ConfigInfo] = None
    health_info: Optional[HealthInfo] = None
    power_info: Optional[PowerInfo] = None
    node_info: Optional[NodeInfo] = None
    platform_info: Optional[PlatformInfo] = None
    bios_license: Optional[BiosLicense] = None


def _parse_fru_info(elem: ET.Element) -> FruInfo:
    board = elem.find("BOARD")
    if board is None:
        return FruInfo(board=None)
    return FruInfo(board=Board(
        serial_num=board.get("SERIAL_NUM", ""),
        part_num=board.get("PART_NUM", ""),
    ))


def _parse_generic_info(elem: ET.Element) -> GenericInfo:
    generic = elem.find("GENERIC")
    return GenericInfo(
        bmc_mac=elem.get("BMC_MAC", ""),
        ipmi_fw_version=elem.get("IPMIFW_VERSION", ""),
        generic=Generic(
            bmc_mac=generic.get("BMC_MAC", ""),
            ipmi_fw_version=generic.get("IPMIFW_VERSION", ""),
        ) if generic is not None else None,
    )


def _parse_config_info(elem: ET.Element) -> ConfigInfo:
    hostname = elem.find("HOSTNAME")
    return ConfigInfo(hostname=hostname.get("NAME", "") if hostname is not None else None)


def _parse_node_info(elem: ET.Element) -> NodeInfo:
    nodes = []
    for node in elem.findall("Node"):
        try:
            node_id = int(node.get("ID") or "0")
        except ValueError as e:
            raise DecodeError(f"Invalid node ID: {node.get('ID')!r}") from e
        nodes.append(Node(
            id=node_id,
            node_serial=node.get("NodeSerialNo", ""),
            power=node.get("Power", ""),
            system_temp=node.get("SystemTemp", ""),
        ))
    return NodeInfo(nodes=tuple(nodes))


def _parse_power_info(elem: ET.Element) -> PowerInfo:
    power = elem.find("POWER")
    return PowerInfo(status=power.get("STATUS", "") if power is not None else "")


def _parse_platform_info(elem: ET.Element) -> PlatformInfo:
    return PlatformInfo(mb_mac_addrs=tuple(
        elem.get(f"MB_MAC_ADDR{i}", "") for i in range(1, 5)
    ))


def decode_ipmi(payload: bytes) -> IpmiDocument:
    """
    Decode an ipmi.cgi answer.

    Args:
        payload: Raw response body

    Returns:
        IpmiDocument with the sub-documents present in the answer

    Raises:
        DecodeError: Body is not XML or its root is not <IPMI>
    """
    try:
        root = ET.fromstring(payload)
    except ET.ParseError as e:
        raise DecodeError(f"Invalid IPMI XML: {e}") from e

    if root.tag != "IPMI":
        raise DecodeError(f"Unexpected IPMI root element <{root.tag}>")

    fields = {}

    bios = root.find("BIOS")
    if bios is not None:
        fields["bios"] = Bios(version=bios.get("VER", ""))

    fields["cpus"] = tuple(
        Cpu(version=cpu.get("VER", ""), core=cpu.get("CORE", ""))
        for cpu in root.findall("CPU")
    )
    fields["dimms"] = tuple(Dimm(size=dimm.get("SIZE", "")) for dimm in root.findall("DIMM"))

    sections = (
        ("fru_info", "FRU_INFO", _parse_fru_info),
        ("generic_info", "GENERIC_INFO", _parse_generic_info),
        ("config_info", "CONFIG_INFO", _parse_config_info),
        ("node_info", "NodeInfo", _parse_node_info),
        ("power_info", "POWER_INFO", _parse_power_info),
        ("platform_info", "PLATFORM_INFO", _parse_platform_info),
    )
    for name, tag, parse in sections:
        elem = root.find(tag)
        if elem is not None:
            fields[name] = parse(elem)

    health = root.find("HEALTH_INFO")
    if health is not None:
        fields["health_info"] = HealthInfo(health=health.get("HEALTH", ""))

    license_elem = root.find("BIOS_LINCENSE")
    if license_elem is not None:
        fields["bios_license"] = BiosLicense(check=license_elem.get("CHECK", ""))

    return IpmiDocument(**fields)
