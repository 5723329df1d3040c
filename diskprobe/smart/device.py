"""SCSI and SATA (SCSI-ATA translation) disk devices."""

from __future__ import annotations

import os
import struct
from collections.abc import Callable

from .ata import ATA_IDENTIFY_PAGE_LEN, AtaIdentifyPage
from .common import (
    READ_CAPACITY10_RESPONSE_LEN,
    READ_CAPACITY16_RESPONSE_LEN,
    ReadCapacityOverflow,
    parse_read_capacity10,
    parse_read_capacity16,
    read_capacity10_cdb,
    read_capacity16_cdb,
)
from .inquiry import INQ_RESP_LEN, InquiryResponse, inquiry_cdb
from .sgio import (
    CDB16_LEN,
    MODE_SENSE_RESPONSE_LEN,
    SCSI_ATA_PASSTHRU,
    SgIOError,
    mode_sense_cdb,
    send_scsi_cdb,
)
from .smartutil import ErrorCollector
from .types import (
    ATA_IDENTIFY_DEVICE,
    ATA_IDENTIFY_ERR,
    ATA_MAJOR,
    ATA_MINOR,
    ATA_TRANSPORT,
    ATACS_ATTR,
    CAPACITY,
    COMPLIANCE,
    FIRMWARE_REV,
    LOGICAL_SECTOR_SIZE,
    MODEL_NUMBER,
    PHYSICAL_SECTOR_SIZE,
    RPM,
    SCSI_GET_LB_SIZE_ERR,
    SCSI_INQ_ATTR,
    SCSI_INQ_ERR,
    SCSI_READ_CAP_ERR,
    SERIAL_NUMBER,
    SIMPLE_SCSI_ATTR,
    VENDOR,
    WWN,
    DiskAttr,
)

Transport = Callable[[int, bytes, int], bytes]

_DEVICE_ERRORS = (OSError, SgIOError, ValueError)


class AttributeNotFound(LookupError):
    """Raised when a device cannot report the requested attribute."""

    def __init__(self, attr_name: str, detail: str | None = None) -> None:
        self.attr_name = attr_name
        super().__init__(detail or f'Value of attribute "{attr_name}" not found')


def _attempt(collector: ErrorCollector, key: str, action: Callable[[], object]) -> object:
    """Run ``action``; record a device error under ``key`` and return None."""
    try:
        return action()
    except _DEVICE_ERRORS as err:
        collector.collect(key, err)
        return None


class ScsiDevice:
    """A SCSI disk reached through SCSI generic requests."""

    def __init__(self, dev_name: str, transport: Transport | None = None) -> None:
        self.dev_name = dev_name
        self.transport: Transport = transport if transport is not None else send_scsi_cdb
        self._fd: int | None = None

    @property
    def fd(self) -> int | None:
        """The open file descriptor, or None when closed."""
        return self._fd

    def open(self) -> None:
        """Open the device node for reading and writing."""
        if self._fd is None:
            self._fd = os.open(self.dev_name, os.O_RDWR)

    def close(self) -> None:
        """Close the device node if it is open."""
        if self._fd is not None:
            fd, self._fd = self._fd, None
            os.close(fd)

    def __enter__(self) -> ScsiDevice:
        self.open()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _take_over(self, other: ScsiDevice) -> None:
        self._fd, other._fd = other._fd, None

    def send_cdb(self, cdb: bytes, length: int) -> bytes:
        """Send ``cdb`` and return ``length`` bytes of response data."""
        if self._fd is None:
            raise ValueError(f"device {self.dev_name} is not open")
        return self.transport(self._fd, bytes(cdb), length)

    def inquiry(self) -> InquiryResponse:
        """Send a standard INQUIRY and parse the response."""
        return InquiryResponse.from_bytes(self.send_cdb(inquiry_cdb(), INQ_RESP_LEN))

    def read_capacity(self) -> int:
        """Return the capacity in bytes, falling back to READ CAPACITY (16) on overflow."""
        data = self.send_cdb(read_capacity10_cdb(), READ_CAPACITY10_RESPONSE_LEN)
        try:
            return parse_read_capacity10(data)
        except ReadCapacityOverflow:
            data = self.send_cdb(read_capacity16_cdb(), READ_CAPACITY16_RESPONSE_LEN)
            return parse_read_capacity16(data)

    def logical_block_size(self) -> int:
        """Return the logical block size reported by READ CAPACITY (10)."""
        data = self.send_cdb(read_capacity10_cdb(), READ_CAPACITY10_RESPONSE_LEN)
        if len(data) < READ_CAPACITY10_RESPONSE_LEN:
            raise ValueError("READ CAPACITY (10) response too short")
        return struct.unpack_from(">I", data, 4)[0]

    def mode_sense(
        self, page: int, sub_page: int, page_control: int, disable_block_desc: bool
    ) -> bytes:
        """Send a MODE SENSE (6) command and return the raw response."""
        cdb = mode_sense_cdb(page, sub_page, page_control, disable_block_desc)
        return self.send_cdb(cdb, MODE_SENSE_RESPONSE_LEN)

    def _inquiry_attribute(self, attr_name: str) -> str:
        try:
            response = self.inquiry()
        except _DEVICE_ERRORS as err:
            raise OSError(f"error in sending SCSI Inquiry command, Error: {err}") from err
        return response.values()[attr_name]

    def _simple_scsi_attribute(self, attr_name: str) -> str:
        if attr_name == LOGICAL_SECTOR_SIZE:
            try:
                return str(self.logical_block_size())
            except _DEVICE_ERRORS as err:
                raise OSError(
                    f"error in getting logical block size of the device, Error: {err}"
                ) from err
        if attr_name == CAPACITY:
            try:
                return str(self.read_capacity())
            except _DEVICE_ERRORS as err:
                raise OSError(
                    f"error in getting total capacity of the device, Error: {err}"
                ) from err
        raise AttributeNotFound(attr_name)

    def attribute(self, attr_name: str) -> str:
        """Return the value of one named attribute of the disk."""
        if attr_name in SCSI_INQ_ATTR:
            return self._inquiry_attribute(attr_name)
        if attr_name in SIMPLE_SCSI_ATTR:
            return self._simple_scsi_attribute(attr_name)
        raise AttributeNotFound(attr_name)

    def _fill_from_inquiry(self, details: DiskAttr) -> None:
        values = self.inquiry().values()
        details.compliance = values[COMPLIANCE]
        details.vendor = values[VENDOR]
        details.model_number = values[MODEL_NUMBER]
        details.firmware_revision = values[FIRMWARE_REV]
        details.serial_number = values[SERIAL_NUMBER]

    def basic_disk_info(self) -> tuple[DiskAttr, dict[str, BaseException]]:
        """Return every basic detail available, with the errors met on the way."""
        collector = ErrorCollector()
        details = DiskAttr()
        _attempt(collector, SCSI_INQ_ERR, lambda: self._fill_from_inquiry(details))
        capacity = _attempt(collector, SCSI_READ_CAP_ERR, self.read_capacity)
        if capacity is not None:
            details.capacity = capacity
        lb_size = _attempt(collector, SCSI_GET_LB_SIZE_ERR, self.logical_block_size)
        if lb_size is not None:
            details.lb_size = lb_size
        return details, collector.errors()


class SataDevice(ScsiDevice):
    """An ATA disk reached through SCSI-ATA translation."""

    def ata_identify(self) -> AtaIdentifyPage:
        """Send ATA IDENTIFY DEVICE through ATA PASS-THROUGH (16)."""
        cdb = bytearray(CDB16_LEN)
        cdb[0] = SCSI_ATA_PASSTHRU
        cdb[1] = 0x08  # ATA protocol: PIO data-in
        cdb[2] = 0x0E  # BYT_BLOK = 1, T_LENGTH = 2, T_DIR = 1
        cdb[14] = ATA_IDENTIFY_DEVICE
        try:
            data = self.send_cdb(bytes(cdb), ATA_IDENTIFY_PAGE_LEN)
        except _DEVICE_ERRORS as err:
            raise OSError(f"error in sending SCSICDB 16 for ATA device, Error: {err}") from err
        return AtaIdentifyPage.from_bytes(data)

    def _ata_attribute(self, attr_name: str) -> str:
        try:
            page = self.ata_identify()
        except _DEVICE_ERRORS as err:
            raise OSError(f"error in sending ATAIdentifyCommand, Error: {err}") from err
        readers: dict[str, Callable[[], str]] = {
            WWN: page.wwn,
            ATA_TRANSPORT: page.ata_transport,
            ATA_MAJOR: page.ata_major_version,
            ATA_MINOR: page.ata_minor_version,
            RPM: lambda: str(page.rotation_rate),
            LOGICAL_SECTOR_SIZE: lambda: str(page.sector_sizes()[0]),
            PHYSICAL_SECTOR_SIZE: lambda: str(page.sector_sizes()[1]),
        }
        reader = readers.get(attr_name)
        if reader is None:
            raise AttributeNotFound(attr_name)
        return reader()

    def attribute(self, attr_name: str) -> str:
        """Return the value of one named attribute of the disk."""
        if attr_name in SCSI_INQ_ATTR:
            return self._inquiry_attribute(attr_name)
        if attr_name in ATACS_ATTR:
            return self._ata_attribute(attr_name)
        if attr_name in SIMPLE_SCSI_ATTR:
            return self._simple_scsi_attribute(attr_name)
        raise AttributeNotFound(attr_name)

    def _fill_from_ata(self, details: DiskAttr) -> None:
        page = self.ata_identify()
        details.lb_size, details.pb_size = page.sector_sizes()
        details.serial_number = page.serial_number()
        details.wwn = page.wwn()
        details.rotation_rate = page.rotation_rate
        details.ata_transport = page.ata_transport()
        details.ata_major_version = page.ata_major_version()
        details.ata_minor_version = page.ata_minor_version()

    def basic_disk_info(self) -> tuple[DiskAttr, dict[str, BaseException]]:
        """Return every basic detail available, with the errors met on the way."""
        collector = ErrorCollector()
        details = DiskAttr()
        _attempt(collector, ATA_IDENTIFY_ERR, lambda: self._fill_from_ata(details))
        _attempt(collector, SCSI_INQ_ERR, lambda: self._fill_from_inquiry(details))
        capacity = _attempt(collector, SCSI_READ_CAP_ERR, self.read_capacity)
        if capacity is not None:
            details.capacity = capacity
        return details, collector.errors()


def detect_scsi_type(dev_name: str, transport: Transport | None = None) -> ScsiDevice:
    """Open ``dev_name`` and return a SataDevice for ATA disks, else a ScsiDevice."""
    device = ScsiDevice(dev_name, transport)
    device.open()
    try:
        response = device.inquiry()
    except BaseException:
        device.close()
        raise
    if response.is_ata():
        sata = SataDevice(dev_name, device.transport)
        sata._take_over(device)
        return sata
    return device