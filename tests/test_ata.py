import struct

import pytest

from diskprobe.smart.ata import AtaIdentifyPage, swap_byte_order

RAW_SERIAL = b"    AFEKS-REAI-L0010"
SERIAL = "    FAKE-SERIAL-0001"


def _page(serial=RAW_SERIAL, **words):
    data = bytearray(512)
    data[20:40] = serial
    defaults = {
        80: 0x07FE,
        81: 0x006D,
        106: 0x6003,
        108: 0x5001,
        109: 0x2345,
        110: 0x6789,
        111: 0xABCD,
        217: 0x0001,
        222: 0x107E,
    }
    defaults.update({int(k[1:]): v for k, v in words.items()})
    for index, value in defaults.items():
        struct.pack_into("=H", data, index * 2, value)
    return AtaIdentifyPage.from_bytes(bytes(data))


def test_swap_byte_order():
    assert swap_byte_order(RAW_SERIAL) == SERIAL.encode()


def test_swap_byte_order_is_involution():
    assert swap_byte_order(swap_byte_order(RAW_SERIAL)) == RAW_SERIAL


def test_swap_byte_order_odd_length():
    with pytest.raises(ValueError):
        swap_byte_order(b"abc")


def test_serial_number():
    assert _page().serial_number() == SERIAL


def test_wwn():
    assert _page().wwn() == "5 001234 56789abcd"


def test_sector_sizes():
    assert _page().sector_sizes() == (512, 4096)


@pytest.mark.parametrize("word", [0x0000, 0x8003, 0x4003, 0xC003])
def test_sector_sizes_default(word):
    assert _page(w106=word).sector_sizes() == (512, 512)


def test_ata_major_version():
    assert _page().ata_major_version() == "ACS-3"


@pytest.mark.parametrize("word", [0x0000, 0xFFFF])
def test_ata_major_version_not_reported(word):
    assert _page(w80=word).ata_major_version() == "This device does not report ATA major version"


def test_ata_major_version_unknown():
    assert _page(w80=0x1000).ata_major_version() == "unknown"


def test_ata_minor_version():
    assert _page().ata_minor_version() == "ACS-3 revision 5"


@pytest.mark.parametrize("word", [0x0000, 0xFFFF])
def test_ata_minor_version_not_reported(word):
    assert _page(w81=word).ata_minor_version() == "This device does not report ATA minor version"


def test_ata_minor_version_unknown():
    assert _page(w81=0x0020).ata_minor_version() == "unknown"


def test_ata_transport():
    assert _page().ata_transport() == "Serial ATA SATA 3.1"


def test_serial_ata_type():
    assert _page().serial_ata_type() == "Serial ATA SATA 3.1"


@pytest.mark.parametrize("word", [0x0000, 0xFFFF])
def test_ata_transport_not_reported(word):
    assert _page(w222=word).ata_transport() == "This device does not report Transport"


def test_ata_transport_parallel():
    assert _page(w222=0x0020).ata_transport() == "Parallel ATA"


def test_ata_transport_pcie():
    assert _page(w222=0xE123).ata_transport() == "PCIe (0x123)"


def test_ata_transport_unknown():
    assert _page(w222=0x2000).ata_transport() == "Unknown (0x2000)"


def test_serial_ata_type_unknown_revision():
    assert _page(w222=0x1100).serial_ata_type() == "Serial ATA SATA (0x100)"


def test_rotation_rate():
    assert _page(w217=7200).rotation_rate == 7200


def test_from_bytes_short():
    with pytest.raises(ValueError):
        AtaIdentifyPage.from_bytes(bytes(100))