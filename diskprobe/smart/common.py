"""Bus detection, precondition checks and READ CAPACITY handling."""

from __future__ import annotations

import os
import re
import struct

from .sgio import (
    CDB10_LEN,
    CDB16_LEN,
    DEFAULT_STATUS_PATH,
    SCSI_READ_CAPACITY_10,
    SCSI_READ_CAPACITY_16,
    SCSI_READ_CAPACITY_SERVICE_ACTION,
    PermissionCheckError,
    check_binary_perm,
)
from .types import SUPPORTED_BUS_TYPE

READ_CAPACITY10_RESPONSE_LEN = 8
READ_CAPACITY16_RESPONSE_LEN = 32

_NVME_DEV_RE = re.compile(r"/dev/nvme[0-9]+n[0-9]+")
_UINT64_MASK = (1 << 64) - 1


class ReadCapacityOverflow(Exception):
    """Raised when READ CAPACITY (10) cannot represent the last LBA."""

    def __init__(self) -> None:
        super().__init__("READ CAPACITY (10) overflow")


class ConditionError(Exception):
    """Raised when a device cannot be probed."""


def detect_bus_type(dev_name: str) -> str:
    """Return "SCSI", "IDE", "NVMe" or "unknown" for a device path."""
    if dev_name.startswith("/dev/sd"):
        return "SCSI"
    if dev_name.startswith("/dev/hd"):
        return "IDE"
    if _NVME_DEV_RE.fullmatch(dev_name):
        return "NVMe"
    return "unknown"


def check_conditions(
    dev_path: str, status_path: str | os.PathLike[str] = DEFAULT_STATUS_PATH
) -> str:
    """Check that ``dev_path`` can be probed and return its bus type."""
    if not dev_path:
        raise ConditionError("no disk device path given to get the disk details")
    try:
        check_binary_perm(status_path)
    except PermissionCheckError as err:
        raise ConditionError(
            f"error while checking device access permissions, Error: {err}"
        ) from err
    bus_type = detect_bus_type(dev_path)
    if bus_type != SUPPORTED_BUS_TYPE:
        raise ConditionError(f'the device type is not supported yet, device type: "{bus_type}"')
    return bus_type


def read_capacity10_cdb() -> bytes:
    """Return the CDB of a READ CAPACITY (10) command."""
    cdb = bytearray(CDB10_LEN)
    cdb[0] = SCSI_READ_CAPACITY_10
    return bytes(cdb)


def read_capacity16_cdb() -> bytes:
    """Return the CDB of a READ CAPACITY (16) command."""
    cdb = bytearray(CDB16_LEN)
    cdb[0] = SCSI_READ_CAPACITY_16
    cdb[1] = SCSI_READ_CAPACITY_SERVICE_ACTION
    cdb[10:14] = READ_CAPACITY16_RESPONSE_LEN.to_bytes(4, "big")
    return bytes(cdb)


def parse_read_capacity10(data: bytes) -> int:
    """Return the capacity in bytes from a READ CAPACITY (10) response."""
    if len(data) < READ_CAPACITY10_RESPONSE_LEN:
        raise ValueError("READ CAPACITY (10) response too short")
    last_lba, block_size = struct.unpack_from(">II", data)
    if last_lba == 0xFFFFFFFF:
        raise ReadCapacityOverflow()
    return (last_lba + 1) * block_size


def parse_read_capacity16(data: bytes) -> int:
    """Return the capacity in bytes from a READ CAPACITY (16) response."""
    if len(data) < 12:
        raise ValueError("READ CAPACITY (16) response too short")
    last_lba, block_size = struct.unpack_from(">QI", data)
    return ((last_lba + 1) * block_size) & _UINT64_MASK