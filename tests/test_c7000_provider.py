import xml.etree.ElementTree as ET

import pytest

from bmc_inventory.codecs import hpoa_soap
from bmc_inventory.errors import AuthenticationError, InvalidSerialError, SoapFaultError
from bmc_inventory.models import Nic
from bmc_inventory.services import SnapshotService

from conftest import make_response, soap

NS = hpoa_soap.NAMESPACES

ENCLOSURE_INFO = soap(
    "<hpoa:getEnclosureInfoResponse><hpoa:enclosureInfo>"
    "<hpoa:enclosureName>rack12-enc1</hpoa:enclosureName>"
    "<hpoa:productName>BladeSystem c7000 Enclosure G2</hpoa:productName>"
    "<hpoa:serialNumber>CZ1234ABCD</hpoa:serialNumber>"
    "</hpoa:enclosureInfo></hpoa:getEnclosureInfoResponse>"
)


@pytest.fixture
def enclosure(oa_http):
    oa_http.answers.update({
        "getEnclosureInfo": ENCLOSURE_INFO,
        "getOaInfo": soap(
            "<hpoa:getOaInfoResponse><hpoa:oaInfo><hpoa:fwVersion>4.85</hpoa:fwVersion>"
            "</hpoa:oaInfo></hpoa:getOaInfoResponse>"
        ),
        "getOaNetworkInfo": soap(
            "<hpoa:getOaNetworkInfoResponse><hpoa:oaNetworkInfo>"
            "<hpoa:macAddress>9C:8E:99:00:00:01</hpoa:macAddress>"
            "</hpoa:oaNetworkInfo></hpoa:getOaNetworkInfoResponse>"
        ),
        "getEnclosureStatus": soap(
            "<hpoa:getEnclosureStatusResponse><hpoa:enclosureStatus>"
            "<hpoa:operationalStatus>OP_STATUS_OK</hpoa:operationalStatus>"
            "</hpoa:enclosureStatus></hpoa:getEnclosureStatusResponse>"
        ),
        "getPowerSubsystemInfo": soap(
            "<hpoa:getPowerSubsystemInfoResponse><hpoa:powerSubsystemInfo>"
            "<hpoa:powerConsumed>3450</hpoa:powerConsumed>"
            "</hpoa:powerSubsystemInfo></hpoa:getPowerSubsystemInfoResponse>"
        ),
    })
    return oa_http


def envelopes(http):
    return [ET.fromstring(call[2]["data"]) for call in http.calls_to("/hpoa")]


def test_login_has_no_security_header_and_queries_carry_key(c7000, enclosure):
    assert c7000.serial() == "cz1234abcd"

    login, query = envelopes(enclosure)
    assert login.find("SOAP-ENV:Body/hpoa:userLogIn", NS) is not None
    assert login.find("SOAP-ENV:Header", NS) is None

    assert query.find("SOAP-ENV:Body/hpoa:getEnclosureInfo", NS) is not None
    assert query.findtext("SOAP-ENV:Header/wsse:Security/hpoa:HpOaSessionKeyToken/hpoa:oaSessionKey",
                          namespaces=NS) == "key-1"


def test_requests_use_plain_text_content_type(c7000, enclosure):
    c7000.version()
    for _, url, kwargs in enclosure.calls_to("/hpoa"):
        assert url == "https://10.0.0.5/hpoa"
        assert kwargs["headers"]["Content-Type"] == "text/plain;charset=UTF-8"


def test_accessors(c7000, enclosure):
    assert c7000.model() == "BladeSystem c7000 Enclosure G2"
    assert c7000.name() == "rack12-enc1"
    assert c7000.version() == "4.85"
    assert c7000.status() == "OK"
    assert c7000.power_kw() == 3.45
    assert c7000.nics() == [Nic(name="bmc", mac_address="9c:8e:99:00:00:01")]


def test_oa_info_requested_for_bay_one(c7000, enclosure):
    c7000.version()
    query = envelopes(enclosure)[-1]
    assert query.findtext("SOAP-ENV:Body/hpoa:getOaInfo/hpoa:bayNumber", namespaces=NS) == "1"


def test_degraded_enclosure_is_unhealthy(c7000, enclosure):
    enclosure.answers["getEnclosureStatus"] = soap(
        "<hpoa:getEnclosureStatusResponse><hpoa:enclosureStatus>"
        "<hpoa:operationalStatus>OP_STATUS_DEGRADED</hpoa:operationalStatus>"
        "</hpoa:enclosureStatus></hpoa:getEnclosureStatusResponse>"
    )
    assert c7000.status() == "Unhealthy"


def test_missing_serial(c7000, enclosure):
    enclosure.answers["getEnclosureInfo"] = soap(
        "<hpoa:getEnclosureInfoResponse><hpoa:enclosureInfo/></hpoa:getEnclosureInfoResponse>"
    )
    with pytest.raises(InvalidSerialError):
        c7000.serial()


def test_fault_is_raised(c7000, enclosure):
    enclosure.answers["getOaInfo"] = make_response(500, soap(
        "<SOAP-ENV:Fault><SOAP-ENV:Reason><SOAP-ENV:Text>Invalid bay number</SOAP-ENV:Text>"
        "</SOAP-ENV:Reason></SOAP-ENV:Fault>"
    ))
    with pytest.raises(SoapFaultError):
        c7000.version()


def test_login_fault_is_authentication_error(c7000, enclosure):
    enclosure.answers["userLogIn"] = make_response(500, soap(
        "<SOAP-ENV:Fault><SOAP-ENV:Reason><SOAP-ENV:Text>Invalid login</SOAP-ENV:Text>"
        "</SOAP-ENV:Reason></SOAP-ENV:Fault>"
    ))
    with pytest.raises(AuthenticationError):
        c7000.check_credentials()


def test_session_fault_triggers_new_login(c7000, enclosure):
    expired = make_response(500, soap(
        "<SOAP-ENV:Fault><SOAP-ENV:Reason><SOAP-ENV:Text>Invalid session key</SOAP-ENV:Text>"
        "</SOAP-ENV:Reason></SOAP-ENV:Fault>"
    ))
    enclosure.answers["getEnclosureInfo"] = [expired, ENCLOSURE_INFO]

    assert c7000.serial() == "cz1234abcd"
    logins = [e for e in envelopes(enclosure) if e.find("SOAP-ENV:Body/hpoa:userLogIn", NS) is not None]
    assert len(logins) == 2


def test_logout_sends_key(c7000, enclosure):
    c7000.check_credentials()
    c7000.close()
    logout = envelopes(enclosure)[-1]
    assert logout.find("SOAP-ENV:Body/hpoa:userLogOut", NS) is not None
    assert logout.findtext(".//hpoa:oaSessionKey", namespaces=NS) == "key-1"


def test_chassis_snapshot(c7000, enclosure):
    chassis = SnapshotService(c7000).chassis_snapshot()
    assert chassis.kind == "chassis"
    assert chassis.vendor == "HP"
    assert chassis.bmc_type == "c7000"
    assert chassis.serial == "cz1234abcd"
    assert chassis.fw_version == "4.85"
    assert chassis.power_kw == 3.45
    assert chassis.status == "OK"
