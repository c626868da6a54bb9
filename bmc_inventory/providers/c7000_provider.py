import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

import requests

from .base_provider import ChassisProvider, BmcType
from ..codecs import hpoa_soap
from ..errors import AuthenticationError, DecodeError, InvalidSerialError, SoapFaultError, UnableToReadDataError
from ..models import Target, Nic
from ..parsers import MacParser
from ..session_manager import BmcSession

logger = logging.getLogger(__name__)

# Bay of the active Onboard Administrator
OA_BAY = 1


class HpoaSession(BmcSession):
    """Onboard Administrator session; the key travels in the SOAP header"""

    @property
    def url(self) -> str:
        return f"{self.target.base_url}/{hpoa_soap.ENDPOINT}"

    def post_xml(self, data: bytes, log_body: bool = True) -> requests.Response:
        """POST a serialized envelope with the OA's plain-text content type"""
        return self.send(
            "POST", self.url, log_body=log_body,
            data=data,
            headers={"Content-Type": hpoa_soap.CONTENT_TYPE},
        )

    def _authenticate(self) -> str:
        request = hpoa_soap.build_request(
            "userLogIn",
            username=self.target.username,
            password=self.target.password,
        )
        data = hpoa_soap.serialize(hpoa_soap.wrap_xml(request, ""))
        try:
            response = self.post_xml(data, log_body=False)
        except requests.RequestException as e:
            raise AuthenticationError(f"Login to {self.target.host} failed: {e}") from e

        try:
            login = hpoa_soap.decode_response(response.content, "userLogIn")
        except (DecodeError, SoapFaultError) as e:
            raise AuthenticationError(
                f"Login to {self.target.host} failed: {e}",
                status_code=response.status_code
            ) from e

        key = login.findtext("hpoa:HpOaSessionKeyToken/hpoa:oaSessionKey", default="",
                             namespaces=hpoa_soap.NAMESPACES)
        if not key:
            raise AuthenticationError(f"Login to {self.target.host} failed: no session key returned")
        return key.strip()

    def _logout(self, token: str) -> None:
        self.post_xml(hpoa_soap.serialize(hpoa_soap.wrap_xml(hpoa_soap.build_request("userLogOut"), token)))

    def is_rejected(self, response: requests.Response) -> bool:
        if super().is_rejected(response):
            return True
        return response.status_code >= 400 and hpoa_soap.is_session_fault(response.content)


class C7000Provider(ChassisProvider):
    """HP BladeSystem c7000 Onboard Administrator"""

    VENDOR = "HP"
    BMC_TYPE = BmcType.C7000

    def __init__(self, target: Target, timeout: int = 30, always_login: bool = False,
                 http: Optional[requests.Session] = None):
        super().__init__(target, HpoaSession(target, timeout=timeout, always_login=always_login, http=http))

    def call(self, operation: str, **fields) -> ET.Element:
        """
        Run one HPOA operation with the current session key.

        Returns:
            The ``<hpoa:operationResponse>`` element

        Raises:
            SoapFaultError: The OA answered with a Fault
            DecodeError: The answer is not a SOAP envelope
        """
        request = hpoa_soap.build_request(operation, **fields)

        def prepare(token: str) -> Dict:
            envelope = hpoa_soap.wrap_xml(request, token)
            return {
                "data": hpoa_soap.serialize(envelope),
                "headers": {"Content-Type": hpoa_soap.CONTENT_TYPE},
            }

        logger.debug(f"Calling {operation} on {self.target.host}")
        response = self.session.call("POST", self.session.url, prepare=prepare)
        return hpoa_soap.decode_response(response.content, operation)

    def _section(self, operation: str, section: str, **fields) -> ET.Element:
        """Named child of an operation's response element"""
        element = self.call(operation, **fields).find(f"hpoa:{section}", hpoa_soap.NAMESPACES)
        if element is None:
            raise UnableToReadDataError(f"{section} missing from {operation} answer")
        return element

    def serial(self) -> str:
        info = self._section("getEnclosureInfo", "enclosureInfo")
        serial = hpoa_soap.field(info, "serialNumber")
        if not serial:
            raise InvalidSerialError()
        return serial.lower()

    def model(self) -> str:
        info = self._section("getEnclosureInfo", "enclosureInfo")
        model = hpoa_soap.field(info, "productName")
        if not model:
            raise UnableToReadDataError("Model not found")
        return model

    def name(self) -> str:
        info = self._section("getEnclosureInfo", "enclosureInfo")
        return hpoa_soap.field(info, "enclosureName")

    def version(self) -> str:
        info = self._section("getOaInfo", "oaInfo", bayNumber=OA_BAY)
        return hpoa_soap.field(info, "fwVersion")

    def status(self) -> str:
        info = self._section("getEnclosureStatus", "enclosureStatus")
        status = hpoa_soap.field(info, "operationalStatus")
        if status == "OP_STATUS_OK":
            return "OK"
        return "Unhealthy"

    def power_kw(self) -> float:
        info = self._section("getPowerSubsystemInfo", "powerSubsystemInfo")
        consumed = hpoa_soap.field(info, "powerConsumed")
        if not consumed:
            raise UnableToReadDataError("Power consumption not reported")
        try:
            return float(consumed) / 1000.00
        except ValueError as e:
            raise DecodeError(f"Invalid power reading: {consumed!r}") from e

    def nics(self) -> List[Nic]:
        info = self._section("getOaNetworkInfo", "oaNetworkInfo", bayNumber=OA_BAY)
        mac = hpoa_soap.field(info, "macAddress")
        if not mac:
            return []
        return [Nic(name="bmc", mac_address=MacParser.normalize(mac))]
