"""The standard SCSI INQUIRY command and its response."""

from __future__ import annotations

from dataclasses import dataclass

from .types import COMPLIANCE, FIRMWARE_REV, MODEL_NUMBER, SERIAL_NUMBER, VENDOR

SCSI_INQUIRY = 0x12
INQ_RESP_LEN = 56

_ATA_VENDOR_ID = b"ATA     "


def inquiry_cdb() -> bytes:
    """Return the 6-byte CDB of a standard INQUIRY asking for INQ_RESP_LEN bytes."""
    cdb = bytearray(6)
    cdb[0] = SCSI_INQUIRY
    cdb[3:5] = INQ_RESP_LEN.to_bytes(2, "big")
    return bytes(cdb)


@dataclass(frozen=True)
class InquiryResponse:
    """The fields of a standard INQUIRY response that are of interest."""

    version: int
    vendor_id: bytes
    product_id: bytes
    product_rev: bytes
    serial_number: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> InquiryResponse:
        """Parse a standard INQUIRY response of at least INQ_RESP_LEN bytes."""
        if len(data) < INQ_RESP_LEN:
            raise ValueError(f"INQUIRY response needs {INQ_RESP_LEN} bytes, got {len(data)}")
        return cls(
            version=data[2],
            vendor_id=bytes(data[8:16]),
            product_id=bytes(data[16:32]),
            product_rev=bytes(data[32:36]),
            serial_number=bytes(data[36:56]),
        )

    def values(self) -> dict[str, str]:
        """Return the attribute values keyed by attribute name."""
        spc = (self.version - 0x02) & 0xFF
        return {
            COMPLIANCE: "SPC-" + (str(spc) if spc else ""),
            VENDOR: self.vendor_id.decode("latin-1")[:8],
            MODEL_NUMBER: self.product_id.decode("latin-1")[:16],
            FIRMWARE_REV: self.product_rev.decode("latin-1")[:4],
            SERIAL_NUMBER: self.serial_number.decode("latin-1")[:20],
        }

    def is_ata(self) -> bool:
        """Return True if the vendor identification marks an ATA device."""
        return self.vendor_id == _ATA_VENDOR_ID