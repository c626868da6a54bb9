"""
Redfish JSON subset.

Only the chassis resource is read; everything else goes through the
vendor dialects.
"""

import json
from dataclasses import dataclass
from typing import Optional, Tuple

from ..errors import DecodeError

CHASSIS_ENDPOINT = "redfish/v1/Chassis/1"


@dataclass(frozen=True)
class RedfishErrorInfo:
    code: str
    message: str
    extended_message_ids: Tuple[str, ...] = ()

    def describe(self) -> str:
        text = f"Code: {self.code}, Message: {self.message}"
        for i, message_id in enumerate(self.extended_message_ids):
            text += f", Extended[{i}]: {message_id}"
        return text


@dataclass(frozen=True)
class ChassisInfo:
    serial_number: str
    error: Optional[RedfishErrorInfo] = None


def decode_chassis_info(payload: bytes) -> ChassisInfo:
    """
    Decode a /redfish/v1/Chassis/1 answer.

    An ``error`` object with an empty or missing code is treated as absent.

    Raises:
        DecodeError: Body is not a JSON object
    """
    try:
        data = json.loads(payload)
    except ValueError as e:
        raise DecodeError(f"Invalid chassis JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError("Chassis JSON is not an object")

    error = None
    error_data = data.get("error") or {}
    if error_data.get("code"):
        error = RedfishErrorInfo(
            code=str(error_data["code"]),
            message=error_data.get("message", ""),
            extended_message_ids=tuple(
                entry.get("MessageId", "")
                for entry in error_data.get("@Message.ExtendedInfo") or []
                if isinstance(entry, dict)
            ),
        )

    return ChassisInfo(serial_number=data.get("SerialNumber") or "", error=error)
