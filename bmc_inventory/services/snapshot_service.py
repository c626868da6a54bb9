"""
Snapshot Service - builds one device record from many accessor calls.

The accessors run one at a time in a fixed order. The first failure
aborts the whole snapshot; callers never see a half-filled record.
"""

import logging
from typing import Sequence, Tuple, Union

import requests

from ..errors import BmcError, SnapshotError
from ..models import Blade, Chassis, Discrete, ServerSnapshot
from ..providers import BmcProvider, ChassisProvider, ServerProvider

logger = logging.getLogger(__name__)

# (record fields, provider accessor), in call order
Step = Tuple[Tuple[str, ...], str]

SERVER_STEPS: Sequence[Step] = (
    (("serial",), "serial"),
    (("bmc_version",), "version"),
    (("model",), "model"),
    (("nics",), "nics"),
    (("disks",), "disks"),
    (("bios_version",), "bios_version"),
    (("processor", "processor_count", "processor_core_count", "processor_thread_count"), "cpu"),
    (("memory",), "memory"),
    (("status",), "status"),
    (("name",), "name"),
    (("temp_c",), "temp_c"),
    (("power_kw",), "power_kw"),
    (("power_state",), "power_state"),
    (("bmc_licence_type", "bmc_licence_status"), "license"),
)

BLADE_STEPS: Sequence[Step] = (
    (("blade_position",), "slot"),
    (("chassis_serial",), "chassis_serial"),
)

CHASSIS_STEPS: Sequence[Step] = (
    (("serial",), "serial"),
    (("fw_version",), "version"),
    (("model",), "model"),
    (("name",), "name"),
    (("nics",), "nics"),
    (("status",), "status"),
    (("power_kw",), "power_kw"),
)


class SnapshotService:
    """
    Aggregates provider accessors into a device snapshot.

    Design Pattern: Facade Pattern
    One call hides the dozen BMC round trips behind a snapshot.
    """

    def __init__(self, provider: BmcProvider):
        self.provider = provider

    def is_blade(self) -> bool:
        """
        Probe the device shape.

        A failed probe is not fatal: the device is reported as discrete and
        the error is logged. Any real connectivity problem surfaces again on
        the first accessor of the snapshot.
        """
        try:
            return self.provider.is_blade()
        except (BmcError, requests.RequestException) as e:
            logger.warning(f"Blade probe failed on {self.provider.target.host}, assuming discrete: {e}")
            return False

    def server_snapshot(self) -> ServerSnapshot:
        """
        Build a Blade or Discrete record.

        Raises:
            TypeError: The provider does not manage a server
            SnapshotError: An accessor failed; the original error is the cause
        """
        if not isinstance(self.provider, ServerProvider):
            raise TypeError(f"{type(self.provider).__name__} does not provide server snapshots")

        blade = self.is_blade()
        record_class = Blade if blade else Discrete
        record = record_class(
            vendor=self.provider.vendor,
            bmc_address=self.provider.target.host,
            bmc_type=self.provider.bmc_type,
        )

        logger.info(f"Collecting {record.kind} snapshot from {self.provider.target.host}")
        steps = tuple(SERVER_STEPS) + (tuple(BLADE_STEPS) if blade else ())
        self._populate(record, steps)
        logger.info(f"Snapshot of {self.provider.target.host} complete (serial {record.serial})")
        return record

    def chassis_snapshot(self) -> Chassis:
        """
        Build a Chassis record.

        Raises:
            TypeError: The provider does not manage a chassis
            SnapshotError: An accessor failed; the original error is the cause
        """
        if not isinstance(self.provider, ChassisProvider):
            raise TypeError(f"{type(self.provider).__name__} does not provide chassis snapshots")

        record = Chassis(
            vendor=self.provider.vendor,
            bmc_address=self.provider.target.host,
            bmc_type=self.provider.bmc_type,
        )

        logger.info(f"Collecting chassis snapshot from {self.provider.target.host}")
        self._populate(record, CHASSIS_STEPS)
        logger.info(f"Snapshot of {self.provider.target.host} complete (serial {record.serial})")
        return record

    def snapshot(self) -> Union[ServerSnapshot, Chassis]:
        """Snapshot of whatever kind of device the provider manages"""
        if isinstance(self.provider, ChassisProvider):
            return self.chassis_snapshot()
        return self.server_snapshot()

    def _populate(self, record, steps: Sequence[Step]) -> None:
        for fields, accessor in steps:
            try:
                value = getattr(self.provider, accessor)()
            except (BmcError, requests.RequestException) as e:
                logger.error(f"Snapshot of {self.provider.target.host} aborted at {accessor}(): {e}")
                raise SnapshotError(accessor, e) from e

            if len(fields) == 1:
                setattr(record, fields[0], value)
            else:
                for field_name, field_value in zip(fields, value):
                    setattr(record, field_name, field_value)
