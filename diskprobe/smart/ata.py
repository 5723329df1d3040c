"""Parsing of the ATA IDENTIFY DEVICE data page."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .smartutil import NATIVE_BYTE_ORDER, most_significant_bit
from .types import ATA_MAJOR_VERSIONS, ATA_MINOR_VERSIONS, SERIAL_ATA_TYPE

ATA_IDENTIFY_PAGE_LEN = 512

_SERIAL_OFFSET = 20
_SERIAL_LEN = 20
_MAJOR_WORD = 80
_MINOR_WORD = 81
_SECTOR_SIZE_WORD = 106
_WWN_WORD = 108
_ROTATION_RATE_WORD = 217
_TRANSPORT_WORD = 222

_DEFAULT_SECTOR_SIZE = 512


def _hex_prefixed(value: int, digits: int) -> str:
    """Format ``value`` as 0x followed by at least ``digits`` hex digits."""
    return "0x" + format(value, f"0{digits}x")


def swap_byte_order(data: bytes) -> bytes:
    """Swap the two bytes of every 16-bit word in ``data``."""
    if len(data) % 2:
        raise ValueError("byte string must have an even length")
    swapped = bytearray(len(data))
    swapped[0::2] = data[1::2]
    swapped[1::2] = data[0::2]
    return bytes(swapped)


@dataclass(frozen=True)
class AtaIdentifyPage:
    """The fields of an ATA IDENTIFY DEVICE page that are of interest."""

    raw_serial: bytes
    major_ver: int
    minor_ver: int
    sector_size_word: int
    wwn_words: tuple[int, int, int, int]
    rotation_rate: int
    transport_major: int

    @classmethod
    def from_bytes(cls, data: bytes) -> AtaIdentifyPage:
        """Parse a 512-byte IDENTIFY DEVICE response in native word order."""
        if len(data) < ATA_IDENTIFY_PAGE_LEN:
            raise ValueError(
                f"ATA IDENTIFY page needs {ATA_IDENTIFY_PAGE_LEN} bytes, got {len(data)}"
            )
        word_format = "<H" if NATIVE_BYTE_ORDER == "little" else ">H"

        def word(index: int) -> int:
            return struct.unpack_from(word_format, data, index * 2)[0]

        w0, w1, w2, w3 = (word(_WWN_WORD + i) for i in range(4))
        return cls(
            raw_serial=bytes(data[_SERIAL_OFFSET:_SERIAL_OFFSET + _SERIAL_LEN]),
            major_ver=word(_MAJOR_WORD),
            minor_ver=word(_MINOR_WORD),
            sector_size_word=word(_SECTOR_SIZE_WORD),
            wwn_words=(w0, w1, w2, w3),
            rotation_rate=word(_ROTATION_RATE_WORD),
            transport_major=word(_TRANSPORT_WORD),
        )

    def serial_number(self) -> str:
        """Return the serial number with each byte pair put in reading order."""
        return swap_byte_order(self.raw_serial).decode("latin-1")

    def wwn(self) -> str:
        """Return the World Wide Name as "NAA OUI UNIQUE-ID" in hex."""
        w0, w1, w2, w3 = self.wwn_words
        naa = w0 >> 12
        oui = ((w0 & 0x0FFF) << 12) | (w1 >> 4)
        unique_id = ((w1 & 0xF) << 32) | (w2 << 16) | w3
        return f"{naa:x} {oui:06x} {unique_id:09x}"

    def sector_sizes(self) -> tuple[int, int]:
        """Return the (logical, physical) sector sizes in bytes."""
        logical = physical = _DEFAULT_SECTOR_SIZE
        word = self.sector_size_word
        if (word & 0xC000) != 0x4000:
            return logical, physical
        if word & 0x2000:
            physical <<= word & 0x0F
        return logical, physical

    def ata_major_version(self) -> str:
        """Return the highest ATA major version the device claims."""
        if self.major_ver in (0, 0xFFFF):
            return "This device does not report ATA major version"
        return ATA_MAJOR_VERSIONS.get(most_significant_bit(self.major_ver), "unknown")

    def ata_minor_version(self) -> str:
        """Return the ATA minor version description."""
        if self.minor_ver in (0, 0xFFFF):
            return "This device does not report ATA minor version"
        return ATA_MINOR_VERSIONS.get(self.minor_ver, "unknown")

    def ata_transport(self) -> str:
        """Return the kind of transport (parallel, serial, PCIe) the device uses."""
        major = self.transport_major
        if major in (0, 0xFFFF):
            return "This device does not report Transport"
        kind = major >> 12
        if kind == 0x0:
            return "Parallel ATA"
        if kind == 0x1:
            return self.serial_ata_type()
        if kind == 0xE:
            return f"PCIe ({_hex_prefixed(major & 0x0FFF, 3)})"
        return f"Unknown ({_hex_prefixed(major, 4)})"

    def serial_ata_type(self) -> str:
        """Return the Serial ATA revision reported by the transport word."""
        low = self.transport_major & 0x0FFF
        name = SERIAL_ATA_TYPE.get(most_significant_bit(low))
        if name is not None:
            return "Serial ATA" + name
        return f"Serial ATA SATA ({_hex_prefixed(low, 3)})"