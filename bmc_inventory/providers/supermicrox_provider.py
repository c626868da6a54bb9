import logging
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlsplit

import requests

from .base_provider import ServerProvider, BmcType
from ..codecs import redfish, supermicro_xml
from ..codecs.supermicro_xml import IpmiDocument, Node, NodeInfo
from ..errors import (
    AuthenticationError,
    DecodeError,
    InvalidSerialError,
    NotImplementedByProviderError,
    PageNotFoundError,
    RedfishError,
    UnableToReadDataError,
)
from ..models import Target, Nic, Disk
from ..parsers import MacParser, ProcessorParser
from ..session_manager import BmcSession

logger = logging.getLogger(__name__)

SESSION_COOKIE = "SID"
IPMI_PATH = "/cgi/ipmi.cgi"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class SupermicroSession(BmcSession):
    """Cookie session of the Supermicro X10/X11 web interface"""

    def _authenticate(self) -> str:
        url = f"{self.target.base_url}/cgi/login.cgi"
        try:
            response = self.send(
                "POST", url, log_body=False,
                data={"name": self.target.username, "pwd": self.target.password},
                headers={"Content-Type": FORM_CONTENT_TYPE},
            )
        except requests.RequestException as e:
            raise AuthenticationError(f"Login to {self.target.host} failed: {e}") from e

        if response.status_code != 200:
            raise AuthenticationError(
                f"Login to {self.target.host} failed with HTTP {response.status_code}",
                status_code=response.status_code
            )

        sid = response.cookies.get(SESSION_COOKIE) or self.http.cookies.get(SESSION_COOKIE)
        if not sid:
            raise AuthenticationError(f"Login to {self.target.host} failed: no {SESSION_COOKIE} cookie returned")

        # The SID is attached explicitly to each request, keep the jar empty
        self.http.cookies.clear()
        return sid

    def _logout(self, token: str) -> None:
        self.send("GET", f"{self.target.base_url}/cgi/logout.cgi", cookies={SESSION_COOKIE: token})

    def is_rejected(self, response: requests.Response) -> bool:
        if super().is_rejected(response):
            return True
        # A stale SID on ipmi.cgi gets the HTML login redirect with status 200
        return (
            200 <= response.status_code < 300
            and urlsplit(response.url or "").path == IPMI_PATH
            and b"<IPMI" not in response.content
        )


class SupermicroXProvider(ServerProvider):
    """Supermicro X10/X11 BMC over ipmi.cgi, with a Redfish chassis lookup"""

    VENDOR = "Supermicro"
    BMC_TYPE = BmcType.SUPERMICROX

    def __init__(self, target: Target, timeout: int = 30, always_login: bool = False,
                 http: Optional[requests.Session] = None):
        super().__init__(target, SupermicroSession(target, timeout=timeout, always_login=always_login, http=http))

    @staticmethod
    def _with_cookie(token: str) -> Dict:
        if not token:
            return {}
        return {"cookies": {SESSION_COOKIE: token}}

    # ------------------------------------------------------------------
    # Wire operations
    # ------------------------------------------------------------------

    def query(self, request_key: str) -> IpmiDocument:
        """
        POST a query key to ipmi.cgi and decode the XML answer.

        Args:
            request_key: One of the supermicro_xml query constants

        Raises:
            requests.HTTPError: Non-2xx answer
            AuthenticationError: The answer was still a login page after re-login
            DecodeError: Answer is not an IPMI document
        """
        url = f"{self.target.base_url}{IPMI_PATH}"
        logger.debug(f"Retrieving {request_key} from {self.target.host}")
        response = self.session.call(
            "POST", url, prepare=self._with_cookie,
            data=request_key,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        response.raise_for_status()
        return supermicro_xml.decode_ipmi(response.content)

    def get(self, endpoint: str, authentication: bool = False) -> bytes:
        """
        GET a path-style endpoint.

        Args:
            endpoint: Path relative to the BMC root, without leading slash
            authentication: Also send HTTP Basic credentials

        Raises:
            PageNotFoundError: The endpoint answered 404
        """
        url = f"{self.target.base_url}/{endpoint}"
        kwargs = {}
        if authentication:
            kwargs["auth"] = (self.target.username, self.target.password)

        response = self.session.call("GET", url, prepare=self._with_cookie, **kwargs)
        if response.status_code == 404:
            raise PageNotFoundError(url)
        return response.content

    def post(self, endpoint: str, url_values: Optional[Dict[str, str]] = None,
             form: Optional[bytes] = None, content_type: Optional[str] = None) -> int:
        """
        POST to a /cgi/ endpoint and return the raw status code.

        Sends url_values URL-encoded, or the raw ``form`` body with
        ``content_type`` (e.g. a multipart boundary) when one is given.
        """
        url = f"{self.target.base_url}/cgi/{endpoint}"
        if content_type:
            data, headers = form or b"", {"Content-Type": content_type}
        else:
            data, headers = url_values or {}, {"Content-Type": FORM_CONTENT_TYPE}

        response = self.session.call("POST", url, prepare=self._with_cookie, data=data, headers=headers)
        return response.status_code

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _to_int(value: str, what: str) -> int:
        try:
            return ProcessorParser.parse_count(value)
        except ValueError as e:
            raise DecodeError(f"Invalid {what}: {value!r}") from e

    def _own_node(self, node_info: NodeInfo) -> Optional[Node]:
        """Node entry whose serial matches this device's serial"""
        serial = self.serial()
        for node in node_info.nodes:
            if node.node_serial.lower() == serial:
                return node
        return None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def serial(self) -> str:
        ipmi = self.query(supermicro_xml.FRU_INFO)
        if ipmi.fru_info is None or ipmi.fru_info.board is None:
            raise InvalidSerialError()
        return ipmi.fru_info.board.serial_num.lower()

    def chassis_serial(self) -> str:
        """Serial of the chassis the blade is attached to"""
        chassis_info = redfish.decode_chassis_info(self.get(redfish.CHASSIS_ENDPOINT, authentication=True))
        if chassis_info.error is not None:
            raise RedfishError(chassis_info.error.describe(), error_code=chassis_info.error.code)
        return chassis_info.serial_number.lower()

    def model(self) -> str:
        ipmi = self.query(supermicro_xml.FRU_INFO)
        if ipmi.fru_info is not None and ipmi.fru_info.board is not None:
            return ipmi.fru_info.board.part_num
        raise UnableToReadDataError("Model not found")

    def version(self) -> str:
        ipmi = self.query(supermicro_xml.GENERIC_INFO)
        generic_info = ipmi.generic_info
        if generic_info is not None:
            if generic_info.ipmi_fw_version:
                return generic_info.ipmi_fw_version
            if generic_info.generic is not None:
                return generic_info.generic.ipmi_fw_version
        return ""

    def name(self) -> str:
        """Hostname configured on the BMC"""
        ipmi = self.query(supermicro_xml.CONFIG_INFO)
        if ipmi.config_info is not None and ipmi.config_info.hostname is not None:
            return ipmi.config_info.hostname
        return ""

    def status(self) -> str:
        ipmi = self.query(supermicro_xml.HEALTH_INFO)
        if ipmi.health_info is not None and ipmi.health_info.health == "1":
            return "OK"
        return "Unhealthy"

    def memory(self) -> int:
        ipmi = self.query(supermicro_xml.SMBIOS_INFO)
        total_mb = 0
        for dimm in ipmi.dimms:
            size = dimm.size[:-3] if dimm.size.endswith(" MB") else dimm.size
            total_mb += self._to_int(size, "DIMM size")
        return total_mb // 1024

    def cpu(self) -> Tuple[str, int, int, int]:
        """
        Processor of the first socket plus socket count.

        SMBIOS does not expose hyperthreads, so the thread count is the
        core count.
        """
        ipmi = self.query(supermicro_xml.SMBIOS_INFO)
        if not ipmi.cpus:
            return "", 0, 0, 0

        entry = ipmi.cpus[0]
        cpu = ProcessorParser.standardize_name(entry.version)
        core_count = self._to_int(entry.core, "CPU core count")
        return cpu, len(ipmi.cpus), core_count, core_count

    def bios_version(self) -> str:
        ipmi = self.query(supermicro_xml.SMBIOS_INFO)
        if ipmi.bios is not None:
            return ipmi.bios.version
        return ""

    def power_kw(self) -> float:
        ipmi = self.query(supermicro_xml.NODE_INFO)
        if ipmi.node_info is None:
            return 0.0
        node = self._own_node(ipmi.node_info)
        if node is None:
            return 0.0
        return self._to_int(node.power, "power reading") / 1000.00

    def power_state(self) -> str:
        ipmi = self.query(supermicro_xml.POWER_INFO)
        if ipmi.power_info is not None:
            return ipmi.power_info.status.lower()
        return "unknown"

    def temp_c(self) -> int:
        ipmi = self.query(supermicro_xml.NODE_INFO)
        if ipmi.node_info is None:
            return 0
        node = self._own_node(ipmi.node_info)
        if node is None:
            return 0
        return self._to_int(node.system_temp, "system temperature")

    def is_blade(self) -> bool:
        """True when the node table lists at least one identified node"""
        ipmi = self.query(supermicro_xml.NODE_INFO)
        if ipmi.node_info is None:
            return False
        return any(node.node_serial for node in ipmi.node_info.nodes)

    def slot(self) -> int:
        ipmi = self.query(supermicro_xml.NODE_INFO)
        if ipmi.node_info is None:
            raise UnableToReadDataError("Node information not available")
        node = self._own_node(ipmi.node_info)
        if node is None:
            return 1
        return node.id + 1

    def nics(self) -> List[Nic]:
        nics: List[Nic] = []

        ipmi = self.query(supermicro_xml.GENERIC_INFO)
        generic_info = ipmi.generic_info
        if generic_info is not None:
            if generic_info.bmc_mac:
                nics.append(Nic(name="bmc", mac_address=MacParser.normalize(generic_info.bmc_mac)))
            elif generic_info.generic is not None:
                nics.append(Nic(name="bmc", mac_address=MacParser.normalize(generic_info.generic.bmc_mac)))

        ipmi = self.query(supermicro_xml.PLATFORM_INFO)
        if ipmi.platform_info is not None:
            for i, mac in enumerate(ipmi.platform_info.mb_mac_addrs):
                if not mac:
                    continue
                if not MacParser.is_mac_address(mac):
                    logger.warning(f"Unexpected MAC format for eth{i} on {self.target.host}: {mac!r}")
                nics.append(Nic(name=f"eth{i}", mac_address=MacParser.normalize(mac)))

        return nics

    def license(self) -> Tuple[str, str]:
        ipmi = self.query(supermicro_xml.BIOS_LICENSE)
        if ipmi.bios_license is not None:
            if ipmi.bios_license.check == "0":
                return "oob", "Activated"
            if ipmi.bios_license.check == "1":
                return "oob", "Not Activated"
        return "", ""

    def disks(self) -> List[Disk]:
        return []

    # ------------------------------------------------------------------
    # Firmware interface
    # ------------------------------------------------------------------

    def get_bios_version(self) -> str:
        raise NotImplementedByProviderError("get_bios_version")

    def get_bmc_version(self) -> str:
        raise NotImplementedByProviderError("get_bmc_version")

    def firmware_update_bmc(self, file_path: str) -> None:
        raise NotImplementedByProviderError("firmware_update_bmc")
