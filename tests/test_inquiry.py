import pytest

from diskprobe.smart.inquiry import INQ_RESP_LEN, SCSI_INQUIRY, InquiryResponse, inquiry_cdb
from diskprobe.smart.types import COMPLIANCE, FIRMWARE_REV, MODEL_NUMBER, SERIAL_NUMBER, VENDOR

VENDOR_ID = b"ATA     "
PRODUCT_ID = b"EXAMPLE MODEL 01"
PRODUCT_REV = b"1.00"
SERIAL_ID = b"EXAMPLESERIAL0000001"


def _response(version=6, vendor=VENDOR_ID):
    data = bytearray(INQ_RESP_LEN)
    data[2] = version
    data[8:16] = vendor
    data[16:32] = PRODUCT_ID
    data[32:36] = PRODUCT_REV
    data[36:56] = SERIAL_ID
    return bytes(data)


def test_values_round_trip():
    values = InquiryResponse.from_bytes(_response()).values()
    assert values[VENDOR] == VENDOR_ID.decode()
    assert values[MODEL_NUMBER] == PRODUCT_ID.decode()
    assert values[FIRMWARE_REV] == PRODUCT_REV.decode()
    assert values[SERIAL_NUMBER] == SERIAL_ID.decode()


def test_values_keys():
    values = InquiryResponse.from_bytes(_response()).values()
    assert set(values) == {COMPLIANCE, VENDOR, MODEL_NUMBER, FIRMWARE_REV, SERIAL_NUMBER}


def test_compliance():
    assert InquiryResponse.from_bytes(_response(version=6)).values()[COMPLIANCE] == "SPC-4"


def test_compliance_zero_prints_nothing():
    assert InquiryResponse.from_bytes(_response(version=2)).values()[COMPLIANCE] == "SPC-"


def test_is_ata():
    assert InquiryResponse.from_bytes(_response()).is_ata() is True
    assert InquiryResponse.from_bytes(_response(vendor=b"ACME    ")).is_ata() is False


def test_from_bytes_fields():
    response = InquiryResponse.from_bytes(_response(version=5))
    assert response.version == 5
    assert response.product_id == PRODUCT_ID


def test_from_bytes_short():
    with pytest.raises(ValueError):
        InquiryResponse.from_bytes(bytes(10))


def test_inquiry_cdb():
    cdb = inquiry_cdb()
    assert len(cdb) == 6
    assert cdb[0] == SCSI_INQUIRY
    assert int.from_bytes(cdb[3:5], "big") == INQ_RESP_LEN
    assert cdb[5] == 0