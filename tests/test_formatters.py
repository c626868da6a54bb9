import json

from bmc_inventory.formatters import SnapshotFormatter
from bmc_inventory.models import Blade, Chassis, Discrete, Nic
from bmc_inventory.parsers import MacParser, ProcessorParser


def blade():
    return Blade(
        vendor="Supermicro",
        bmc_address="10.0.0.5",
        bmc_type="supermicrox",
        serial="s1",
        model="X11DPT-B",
        nics=[Nic("bmc", "0c:c4:7a:00:00:01"), Nic("eth0", "0c:c4:7a:00:00:02")],
        blade_position=2,
        chassis_serial="c9",
    )


class TestSnapshotFormatter:

    def test_list(self):
        output = SnapshotFormatter().format(blade())
        assert "Blade: 10.0.0.5 (Supermicro supermicrox)" in output
        assert "  blade_position:" in output
        assert "    - bmc     0c:c4:7a:00:00:01" in output
        assert "    - eth0    0c:c4:7a:00:00:02" in output

    def test_list_without_nics(self):
        output = SnapshotFormatter("list").format(Discrete("HP", "oa", "c7000"))
        assert "    (none)" in output
        assert "chassis_serial" not in output

    def test_table(self):
        output = SnapshotFormatter("table").format(blade())
        lines = output.splitlines()
        assert lines[1].split() == ["FIELD", "VALUE"]
        assert "kind" in lines[3] and "blade" in lines[3]
        assert any(line.startswith("nic eth0") for line in lines)

    def test_json(self):
        chassis = Chassis("HP", "oa1", "c7000", serial="enc1", power_kw=3.2)
        data = json.loads(SnapshotFormatter("json").format(chassis))
        assert data["kind"] == "chassis"
        assert data["serial"] == "enc1"
        assert data["power_kw"] == 3.2
        assert data["nics"] == []


class TestProcessorParser:

    def test_clock_speed_dropped(self):
        assert ProcessorParser.standardize_name(
            "Intel(R) Xeon(R) CPU E5-2630 v3 @ 2.40GHz"
        ) == "intel(r) xeon(r) cpu e5-2630 v3"

    def test_trailing_socket_index_dropped(self):
        assert ProcessorParser.standardize_name(
            "  Intel(R) Xeon(R) Gold 6140 CPU 0 "
        ) == "intel(r) xeon(r) gold 6140 cpu"

    def test_empty(self):
        assert ProcessorParser.standardize_name(None) == ""

    def test_parse_count(self):
        assert ProcessorParser.parse_count(" 12 ") == 12


class TestMacParser:

    def test_formats(self):
        assert MacParser.is_mac_address("0C:C4:7A:00:00:01")
        assert MacParser.is_mac_address("0c-c4-7a-00-00-01")
        assert MacParser.is_mac_address("0cc47a000001")
        assert not MacParser.is_mac_address("0c:c4:7a")
        assert not MacParser.is_mac_address("")

    def test_normalize(self):
        assert MacParser.normalize(" 0C:C4:7A:00:00:01 ") == "0c:c4:7a:00:00:01"
        assert MacParser.normalize(None) == ""
