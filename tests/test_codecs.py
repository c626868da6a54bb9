import xml.etree.ElementTree as ET

import pytest

from bmc_inventory.codecs import hpoa_soap, redfish, supermicro_xml
from bmc_inventory.errors import DecodeError, SoapFaultError

from conftest import ipmi, soap

NS = hpoa_soap.NAMESPACES


class TestSupermicroXml:

    def test_absent_sections_decode_as_none(self):
        document = supermicro_xml.decode_ipmi(ipmi('<FRU_INFO RES="1"/>').encode())
        assert document.fru_info is not None
        assert document.fru_info.board is None
        assert document.generic_info is None
        assert document.node_info is None
        assert document.cpus == ()

    def test_node_info(self):
        document = supermicro_xml.decode_ipmi(ipmi(
            '<NodeInfo><Node ID="2" NodeSerialNo="S1" Power="120" SystemTemp="30"/></NodeInfo>'
        ).encode())
        node = document.node_info.nodes[0]
        assert (node.id, node.node_serial, node.power, node.system_temp) == (2, "S1", "120", "30")

    def test_empty_node_id_is_zero(self):
        document = supermicro_xml.decode_ipmi(ipmi(
            '<NodeInfo><Node ID="" NodeSerialNo="S1"/><Node NodeSerialNo="S2"/></NodeInfo>'
        ).encode())
        assert [node.id for node in document.node_info.nodes] == [0, 0]

    def test_generic_info_both_layouts(self):
        document = supermicro_xml.decode_ipmi(ipmi(
            '<GENERIC_INFO BMC_MAC="aa:bb:cc:dd:ee:ff"><GENERIC BMC_MAC="11:22:33:44:55:66"/></GENERIC_INFO>'
        ).encode())
        assert document.generic_info.bmc_mac == "aa:bb:cc:dd:ee:ff"
        assert document.generic_info.generic.bmc_mac == "11:22:33:44:55:66"

    def test_malformed_xml(self):
        with pytest.raises(DecodeError):
            supermicro_xml.decode_ipmi(b"<html><body>login")

    def test_unexpected_root(self):
        with pytest.raises(DecodeError):
            supermicro_xml.decode_ipmi(b"<html/>")


class TestRedfish:

    def test_serial(self):
        info = redfish.decode_chassis_info(b'{"SerialNumber": "C1"}')
        assert info.serial_number == "C1"
        assert info.error is None

    def test_error_with_extended_info(self):
        info = redfish.decode_chassis_info(
            b'{"error": {"code": "Base.1.0.GeneralError", "message": "bad",'
            b' "@Message.ExtendedInfo": [{"MessageId": "Base.1.0.InternalError"}]}}'
        )
        assert info.error.describe() == (
            "Code: Base.1.0.GeneralError, Message: bad, Extended[0]: Base.1.0.InternalError"
        )

    def test_empty_error_code_is_no_error(self):
        info = redfish.decode_chassis_info(b'{"SerialNumber": "C1", "error": {"code": ""}}')
        assert info.error is None

    def test_malformed_json(self):
        with pytest.raises(DecodeError):
            redfish.decode_chassis_info(b"<html>")


class TestHpoaSoap:

    def _roundtrip(self, session_key):
        request = hpoa_soap.build_request("getEnclosureInfo")
        return ET.fromstring(hpoa_soap.serialize(hpoa_soap.wrap_xml(request, session_key)))

    def test_session_key_header(self):
        envelope = self._roundtrip("key-42")
        headers = envelope.findall("SOAP-ENV:Header/wsse:Security", NS)
        assert len(headers) == 1
        assert headers[0].get(f"{{{hpoa_soap.SOAP_ENV_NS}}}mustUnderstand") == "true"
        assert headers[0].findtext("hpoa:HpOaSessionKeyToken/hpoa:oaSessionKey", namespaces=NS) == "key-42"

    def test_no_header_without_session_key(self):
        envelope = self._roundtrip("")
        assert envelope.findall("SOAP-ENV:Header", NS) == []
        assert envelope.findall(".//wsse:Security", NS) == []

    def test_payload_in_body(self):
        envelope = self._roundtrip("key-42")
        assert envelope.find("SOAP-ENV:Body/hpoa:getEnclosureInfo", NS) is not None

    def test_fixed_namespace_declarations(self):
        request = hpoa_soap.build_request("userLogIn", username="u", password="p")
        data = hpoa_soap.serialize(hpoa_soap.wrap_xml(request, "")).decode()
        assert data.startswith("<SOAP-ENV:Envelope ")
        for prefix, uri in NS.items():
            assert f'xmlns:{prefix}="{uri}"' in data
        assert "<hpoa:username>u</hpoa:username><hpoa:password>p</hpoa:password>" in data

    def test_plain_text_content_type(self):
        assert hpoa_soap.CONTENT_TYPE == "text/plain;charset=UTF-8"

    def test_decode_response(self):
        response = hpoa_soap.decode_response(
            soap("<hpoa:getOaInfoResponse><hpoa:oaInfo><hpoa:fwVersion>4.85</hpoa:fwVersion>"
                 "</hpoa:oaInfo></hpoa:getOaInfoResponse>").encode(),
            "getOaInfo",
        )
        assert hpoa_soap.field(response.find("hpoa:oaInfo", NS), "fwVersion") == "4.85"

    def test_fault(self):
        body = soap(
            "<SOAP-ENV:Fault><SOAP-ENV:Reason><SOAP-ENV:Text>Operation failed</SOAP-ENV:Text></SOAP-ENV:Reason>"
            "<SOAP-ENV:Detail><hpoa:faultInfo><hpoa:errorCode>141</hpoa:errorCode>"
            "<hpoa:errorText>Invalid bay number</hpoa:errorText></hpoa:faultInfo></SOAP-ENV:Detail>"
            "</SOAP-ENV:Fault>"
        ).encode()
        with pytest.raises(SoapFaultError) as exc_info:
            hpoa_soap.decode_response(body, "getOaInfo")
        assert exc_info.value.error_code == "141"
        assert str(exc_info.value) == "Operation failed: Invalid bay number"
        assert not hpoa_soap.is_session_fault(body)

    def test_missing_response_element(self):
        with pytest.raises(DecodeError):
            hpoa_soap.decode_response(soap("<hpoa:otherResponse/>").encode(), "getOaInfo")
