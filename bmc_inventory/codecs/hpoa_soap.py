"""
HP Onboard Administrator SOAP codec.

Requests are SOAP 1.2 envelopes POSTed to /hpoa. Once logged in, the
session key travels inside every envelope as a WS-Security header, never
as a cookie.

Envelopes are built with literal prefixed tag names ("SOAP-ENV:Body")
and explicit xmlns attributes so the serialized form carries the fixed
namespace declarations the OA firmware expects. Responses are parsed
namespace-aware.
"""

import xml.etree.ElementTree as ET
from typing import Optional

from ..errors import DecodeError, SoapFaultError

ENDPOINT = "hpoa"
# The OA rejects application/soap+xml
CONTENT_TYPE = "text/plain;charset=UTF-8"

SOAP_ENV_NS = "http://www.w3.org/2003/05/soap-envelope"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NS = "http://www.w3.org/2001/XMLSchema"
WSU_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-utility-1.0.xsd"
WSSE_NS = "http://docs.oasis-open.org/wss/2004/01/oasis-200401-wss-wssecurity-secext-1.0.xsd"
HPOA_NS = "hpoa.xsd"

NAMESPACES = {
    "SOAP-ENV": SOAP_ENV_NS,
    "xsi": XSI_NS,
    "xsd": XSD_NS,
    "wsu": WSU_NS,
    "wsse": WSSE_NS,
    "hpoa": HPOA_NS,
}


def build_request(operation: str, **fields) -> ET.Element:
    """
    Build an ``<hpoa:operation>`` payload element.

    Args:
        operation: HPOA operation name, e.g. "getEnclosureInfo"
        **fields: Child elements, in order, as text values
    """
    element = ET.Element(f"hpoa:{operation}")
    for name, value in fields.items():
        child = ET.SubElement(element, f"hpoa:{name}")
        child.text = str(value)
    return element


def wrap_xml(element: ET.Element, session_key: str) -> ET.Element:
    """
    Wrap a payload element in a SOAP envelope.

    Args:
        element: Payload placed in the body
        session_key: OA session key; empty for the login call, which
            cannot present one yet and gets no header at all

    Returns:
        The envelope element
    """
    envelope = ET.Element("SOAP-ENV:Envelope", {f"xmlns:{prefix}": uri for prefix, uri in NAMESPACES.items()})

    if session_key:
        header = ET.SubElement(envelope, "SOAP-ENV:Header")
        security = ET.SubElement(header, "wsse:Security", {"SOAP-ENV:mustUnderstand": "true"})
        token = ET.SubElement(security, "hpoa:HpOaSessionKeyToken")
        key = ET.SubElement(token, "hpoa:oaSessionKey")
        key.text = session_key

    body = ET.SubElement(envelope, "SOAP-ENV:Body")
    body.append(element)
    return envelope


def serialize(envelope: ET.Element) -> bytes:
    return ET.tostring(envelope, encoding="utf-8")


def _parse(body: bytes) -> ET.Element:
    try:
        return ET.fromstring(body)
    except ET.ParseError as e:
        raise DecodeError(f"Invalid SOAP response: {e}") from e


def find_fault(root: ET.Element) -> Optional[SoapFaultError]:
    """Return the SOAP Fault of a parsed envelope as an exception, if any"""
    fault = root.find("SOAP-ENV:Body/SOAP-ENV:Fault", NAMESPACES)
    if fault is None:
        return None

    reason = fault.findtext("SOAP-ENV:Reason/SOAP-ENV:Text", default="", namespaces=NAMESPACES)
    error_code = fault.findtext(".//hpoa:errorCode", default=None, namespaces=NAMESPACES)
    error_text = fault.findtext(".//hpoa:errorText", default="", namespaces=NAMESPACES)

    message = reason.strip() or "SOAP fault"
    if error_text:
        message = f"{message}: {error_text.strip()}"
    return SoapFaultError(message, error_code=error_code)


def decode_response(body: bytes, operation: str) -> ET.Element:
    """
    Extract the ``<hpoa:operationResponse>`` element of an answer.

    Raises:
        DecodeError: Body is not XML or lacks the response element
        SoapFaultError: The OA answered with a Fault
    """
    root = _parse(body)

    fault = find_fault(root)
    if fault is not None:
        raise fault

    response = root.find(f"SOAP-ENV:Body/hpoa:{operation}Response", NAMESPACES)
    if response is None:
        raise DecodeError(f"Missing {operation}Response in SOAP body")
    return response


def is_session_fault(body: bytes) -> bool:
    """Whether an answer is a Fault complaining about the session key"""
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        return False
    fault = find_fault(root)
    return fault is not None and "session" in fault.message.lower()


def field(element: ET.Element, name: str) -> str:
    """Text of a direct ``hpoa:`` child, empty when absent"""
    return (element.findtext(f"hpoa:{name}", default="", namespaces=NAMESPACES) or "").strip()
