"""SCSI generic (SG_IO) requests and the capability check guarding them."""

from __future__ import annotations

import array
import fcntl
import os
import struct
from typing import NamedTuple

from .types import DEFAULT_TIMEOUT, SG_DXFER_FROM_DEV, SG_INFO_OK, SG_INFO_OK_MASK, SG_IO

SCSI_MODE_SENSE = 0x1A
SCSI_READ_CAPACITY_10 = 0x25
SCSI_READ_CAPACITY_16 = 0x9E
SCSI_READ_CAPACITY_SERVICE_ACTION = 0x10
SCSI_ATA_PASSTHRU = 0x85

CDB6_LEN = 6
CDB10_LEN = 10
CDB16_LEN = 16

MODE_SENSE_RESPONSE_LEN = 64
SENSE_BUFFER_LEN = 32

DEFAULT_STATUS_PATH = "/proc/self/status"
CAP_SYS_RAWIO = 1 << 17
CAP_SYS_ADMIN = 1 << 21

# Layout of struct sg_io_hdr, padded at the end to pointer alignment.
SG_IO_HEADER_FORMAT = "@iiBBHIPPPIIiPBBBBHHiII0P"
SG_IO_HEADER_FIELDS = (
    "interface_id",
    "dxfer_direction",
    "cmd_len",
    "mx_sb_len",
    "iovec_count",
    "dxfer_len",
    "dxferp",
    "cmdp",
    "sbp",
    "timeout",
    "flags",
    "pack_id",
    "usr_ptr",
    "status",
    "masked_status",
    "msg_status",
    "sb_len_wr",
    "host_status",
    "driver_status",
    "resid",
    "duration",
    "info",
)


def _hex_prefixed(value: int, digits: int) -> str:
    return "0x" + format(value, f"0{digits}x")


class PermissionCheckError(Exception):
    """Raised when the process lacks the capabilities to talk to devices."""


class SgIOError(Exception):
    """Raised when an SG_IO request completes with a non-zero status."""

    def __init__(self, scsi_status: int, host_status: int, driver_status: int) -> None:
        self.scsi_status = scsi_status
        self.host_status = host_status
        self.driver_status = driver_status
        super().__init__(
            f"SCSI status: {_hex_prefixed(scsi_status, 2)}, "
            f"host status: {_hex_prefixed(host_status, 2)}, "
            f"driver status: {_hex_prefixed(driver_status, 2)}"
        )


class SgIOStatus(NamedTuple):
    """Status fields the kernel writes back into an SG_IO header."""

    status: int
    host_status: int
    driver_status: int
    info: int
    resid: int

    @property
    def ok(self) -> bool:
        return (self.info & SG_INFO_OK_MASK) == SG_INFO_OK

    def check(self) -> None:
        """Raise SgIOError unless the request succeeded."""
        if not self.ok:
            raise SgIOError(self.status, self.host_status, self.driver_status)


def check_binary_perm(status_path: str | os.PathLike[str] = DEFAULT_STATUS_PATH) -> int:
    """Return the effective capability mask, raising if neither
    CAP_SYS_RAWIO nor CAP_SYS_ADMIN is in effect."""
    try:
        with open(status_path, encoding="utf-8") as handle:
            lines = handle.readlines()
    except OSError as err:
        raise PermissionCheckError(f"unable to read process capabilities: {err}") from err
    for line in lines:
        key, _, value = line.partition(":")
        if key == "CapEff":
            try:
                effective = int(value.strip(), 16)
            except ValueError as err:
                raise PermissionCheckError(f"malformed CapEff value: {value.strip()!r}") from err
            break
    else:
        raise PermissionCheckError("effective capabilities not reported")
    if not effective & (CAP_SYS_RAWIO | CAP_SYS_ADMIN):
        raise PermissionCheckError(
            "capSysRawIO and capSysAdmin are not in effect, device access will fail"
        )
    return effective


def _address(buffer: array.array) -> int:
    if not isinstance(buffer, array.array) or buffer.itemsize != 1:
        raise TypeError("SG_IO buffers must be byte arrays (array.array('B'))")
    if not len(buffer):
        raise ValueError("SG_IO buffers must not be empty")
    return buffer.buffer_info()[0]


def pack_sg_io_header(
    cdb: array.array, data_buffer: array.array, sense_buffer: array.array
) -> bytearray:
    """Build an sg_io_hdr for a data-in request pointing at the given buffers."""
    cdb_address = _address(cdb)
    data_address = _address(data_buffer)
    sense_address = _address(sense_buffer)
    if len(cdb) > CDB16_LEN:
        raise ValueError(f"CDB longer than {CDB16_LEN} bytes")
    if len(sense_buffer) > 0xFF:
        raise ValueError("sense buffer longer than 255 bytes")
    return bytearray(
        struct.pack(
            SG_IO_HEADER_FORMAT,
            ord("S"),
            SG_DXFER_FROM_DEV,
            len(cdb),
            len(sense_buffer),
            0,
            len(data_buffer),
            data_address,
            cdb_address,
            sense_address,
            DEFAULT_TIMEOUT,
            *([0] * 12),
        )
    )


def unpack_sg_io_status(header: bytes | bytearray) -> SgIOStatus:
    """Read the status fields from an sg_io_hdr."""
    fields = dict(zip(SG_IO_HEADER_FIELDS, struct.unpack_from(SG_IO_HEADER_FORMAT, header)))
    return SgIOStatus(
        status=fields["status"],
        host_status=fields["host_status"],
        driver_status=fields["driver_status"],
        info=fields["info"],
        resid=fields["resid"],
    )


def send_scsi_cdb(fd: int, cdb: bytes, length: int) -> bytes:
    """Send ``cdb`` to the device open on ``fd`` and return ``length`` bytes read back."""
    if length <= 0:
        raise ValueError("response length must be positive")
    cdb_buffer = array.array("B", cdb)
    data = array.array("B", bytes(length))
    sense = array.array("B", bytes(SENSE_BUFFER_LEN))
    header = pack_sg_io_header(cdb_buffer, data, sense)
    fcntl.ioctl(fd, SG_IO, header, True)
    unpack_sg_io_status(header).check()
    return data.tobytes()


def mode_sense_cdb(
    page: int, sub_page: int, page_control: int, disable_block_desc: bool
) -> bytes:
    """Return a MODE SENSE(6) CDB asking for MODE_SENSE_RESPONSE_LEN bytes."""
    return bytes(
        [
            SCSI_MODE_SENSE,
            (1 << 3) if disable_block_desc else 0,
            ((page_control << 6) | page) & 0xFF,
            sub_page & 0xFF,
            MODE_SENSE_RESPONSE_LEN,
            0,
        ]
    )