import dataclasses

import pytest

from diskprobe.smart.types import DiskAttr, Identifier


def test_default_disk_attr_is_empty():
    values = DiskAttr().as_dict()
    assert all(value in ("", 0) for value in values.values())


def test_as_dict_keys_match_fields():
    keys = set(DiskAttr().as_dict())
    assert keys == {field.name for field in dataclasses.fields(DiskAttr)}


def test_as_dict_round_trip():
    attr = DiskAttr(vendor="ATA", capacity=1024, lb_size=512, ata_transport="Serial ATA")
    assert DiskAttr(**attr.as_dict()) == attr


def test_as_dict_carries_values():
    attr = DiskAttr(serial_number="SERIAL-0000", pb_size=4096)
    values = attr.as_dict()
    assert values["serial_number"] == "SERIAL-0000"
    assert values["pb_size"] == 4096


def test_identifier_is_immutable():
    ident = Identifier("/dev/sda")
    with pytest.raises(dataclasses.FrozenInstanceError):
        ident.dev_path = "/dev/sdb"
    assert ident == Identifier("/dev/sda")