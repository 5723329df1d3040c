"""Constants, lookup tables and result types for disk probing."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

# SCSI generic (sg) driver values.
SG_DXFER_NONE = -1
SG_DXFER_TO_DEV = -2
SG_DXFER_FROM_DEV = -3
SG_DXFER_TO_FROM_DEV = -4
SG_INFO_OK = 0x0
SG_INFO_OK_MASK = 0x1
SG_IO = 0x2285
DEFAULT_TIMEOUT = 20000  # milliseconds

ATA_IDENTIFY_DEVICE = 0xEC

# Attribute names.
COMPLIANCE = "Compliance"
VENDOR = "Vendor"
CAPACITY = "Capacity"
LOGICAL_SECTOR_SIZE = "LogicalSectorSize"
PHYSICAL_SECTOR_SIZE = "PhysicalSectorSize"
SERIAL_NUMBER = "SerialNumber"
WWN = "LuWWNDeviceID"
FIRMWARE_REV = "FirmwareRevision"
MODEL_NUMBER = "ModelNumber"
RPM = "RPM"
ATA_MAJOR = "ATAMajorVersion"
ATA_MINOR = "ATAMinorVersion"
ATA_TRANSPORT = "AtaTransport"
SUPPORTED_BUS_TYPE = "SCSI"

# Keys of the error map returned when collecting disk details.
SCSI_INQ_ERR = "SCSIInquiryError"
SCSI_READ_CAP_ERR = "SCSIReadcapacityError"
ATA_IDENTIFY_ERR = "AtaIdentifyError"
RPM_ERR = "RPMError"
SCSI_GET_LB_SIZE_ERR = "GetLogicalBlockSizeError"
DETECT_SCSI_TYPE_ERR = "DetectScsiTypeError"
ERROR_CHECK_CONDITIONS = "errorCheckingConditions"

ATA_MAJOR_VERSIONS: dict[int, str] = {
    1: "ATA-1",
    2: "ATA-2",
    3: "ATA-3",
    4: "ATA-ATAPI-4",
    5: "ATA-ATAPI-5",
    6: "ATA-ATAPI-6",
    7: "ATA-ATAPI-7",
    8: "ATA8-ACS",
    9: "ACS-2",
    10: "ACS-3",
    11: "ACS-4",
}

ATA_MINOR_VERSIONS: dict[int, str] = {
    0x0001: "ATA-1 X3T9.2/781D prior to revision 4",
    0x0002: "ATA-1 published, ANSI X3.221-1994",
    0x0003: "ATA-1 X3T9.2/781D revision 4",
    0x0004: "ATA-2 published, ANSI X3.279-1996",
    0x0005: "ATA-2 X3T10/948D prior to revision 2k",
    0x0006: "ATA-3 X3T10/2008D revision 1",
    0x0007: "ATA-2 X3T10/948D revision 2k",
    0x0008: "ATA-3 X3T10/2008D revision 0",
    0x0009: "ATA-2 X3T10/948D revision 3",
    0x000A: "ATA-3 published, ANSI X3.298-1997",
    0x000B: "ATA-3 X3T10/2008D revision 6",
    0x000C: "ATA-3 X3T13/2008D revision 7 and 7a",
    0x000D: "ATA/ATAPI-4 X3T13/1153D version 6",
    0x000E: "ATA/ATAPI-4 T13/1153D version 13",
    0x000F: "ATA/ATAPI-4 X3T13/1153D version 7",
    0x0010: "ATA/ATAPI-4 T13/1153D version 18",
    0x0011: "ATA/ATAPI-4 T13/1153D version 15",
    0x0012: "ATA/ATAPI-4 published, ANSI NCITS 317-1998",
    0x0013: "ATA/ATAPI-5 T13/1321D version 3",
    0x0014: "ATA/ATAPI-4 T13/1153D version 14",
    0x0015: "ATA/ATAPI-5 T13/1321D revision 1",
    0x0016: "ATA/ATAPI-5 published, ANSI NCITS 340-2000",
    0x0017: "ATA/ATAPI-4 T13/1153D revision 17",
    0x0018: "ATA/ATAPI-6 T13/1410D version 0",
    0x0019: "ATA/ATAPI-6 T13/1410D version 3a",
    0x001A: "ATA/ATAPI-7 T13/1532D version 1",
    0x001B: "ATA/ATAPI-6 T13/1410D version 2",
    0x001C: "ATA/ATAPI-6 T13/1410D version 1",
    0x001D: "ATA/ATAPI-7 published, ANSI INCITS 397-2005",
    0x001E: "ATA/ATAPI-7 T13/1532D version 0",
    0x001F: "ACS-3 revision 3b",
    0x0021: "ATA/ATAPI-7 T13/1532D version 4a",
    0x0022: "ATA/ATAPI-6 published, ANSI INCITS 361-2002",
    0x0027: "ATA8-ACS version 3c",
    0x0028: "ATA8-ACS version 6",
    0x0029: "ATA8-ACS version 4",
    0x0031: "ACS-2 revision 2",
    0x0033: "ATA8-ACS version 3e",
    0x0039: "ATA8-ACS version 4c",
    0x0042: "ATA8-ACS version 3f",
    0x0052: "ATA8-ACS version 3b",
    0x005E: "ACS-4 revision 5",
    0x006D: "ACS-3 revision 5",
    0x0082: "ACS-2 published, ANSI INCITS 482-2012",
    0x0107: "ATA8-ACS version 2d",
    0x010A: "ACS-3 published, ANSI INCITS 522-2014",
    0x0110: "ACS-2 revision 3",
    0x011B: "ACS-3 revision 4",
}

SERIAL_ATA_TYPE: dict[int, str] = {
    0: " ATA8-AST",
    1: " SATA 1.0a",
    2: " SATA II Ext",
    3: " SATA 2.5",
    4: " SATA 2.6",
    5: " SATA 3.0",
    6: " SATA 3.1",
    7: " SATA 3.2",
}

# Attributes answered by a SCSI INQUIRY command.
SCSI_INQ_ATTR = frozenset({COMPLIANCE, VENDOR, SERIAL_NUMBER, MODEL_NUMBER, FIRMWARE_REV})

# Attributes answered by simple SCSI commands such as READ CAPACITY.
SIMPLE_SCSI_ATTR = frozenset({PHYSICAL_SECTOR_SIZE, LOGICAL_SECTOR_SIZE, CAPACITY})

# Attributes answered by the ATA IDENTIFY DEVICE page.
ATACS_ATTR = frozenset(
    {WWN, ATA_TRANSPORT, ATA_MAJOR, ATA_MINOR, RPM, LOGICAL_SECTOR_SIZE, PHYSICAL_SECTOR_SIZE}
)


@dataclass(frozen=True)
class Identifier:
    """Identifies the device to probe by its path, e.g. /dev/sda."""

    dev_path: str


@dataclass
class DiskAttr:
    """Basic and ATA-specific details of a disk."""

    compliance: str = ""
    vendor: str = ""
    model_number: str = ""
    serial_number: str = ""
    firmware_revision: str = ""
    wwn: str = ""
    capacity: int = 0
    lb_size: int = 0
    pb_size: int = 0
    rotation_rate: int = 0
    ata_major_version: str = ""
    ata_minor_version: str = ""
    ata_transport: str = ""

    def as_dict(self) -> dict[str, str | int]:
        """Return the details as a plain dictionary keyed by field name."""
        return dataclasses.asdict(self)