"""Top-level queries for the basic details of a disk."""

from __future__ import annotations

from .common import ConditionError, check_conditions
from .device import AttributeNotFound, Transport, detect_scsi_type
from .sgio import SgIOError
from .smartutil import ErrorCollector
from .types import DETECT_SCSI_TYPE_ERR, ERROR_CHECK_CONDITIONS, DiskAttr, Identifier


def basic_disk_info(
    identifier: Identifier, transport: Transport | None = None
) -> tuple[DiskAttr, dict[str, BaseException]]:
    """Return all available basic details of the disk, with any errors keyed by step."""
    collector = ErrorCollector()
    try:
        check_conditions(identifier.dev_path)
    except ConditionError as err:
        collector.collect(ERROR_CHECK_CONDITIONS, err)
        return DiskAttr(), collector.errors()
    try:
        device = detect_scsi_type(identifier.dev_path, transport)
    except (OSError, SgIOError, ValueError) as err:
        collector.collect(DETECT_SCSI_TYPE_ERR, err)
        return DiskAttr(), collector.errors()
    with device:
        return device.basic_disk_info()


def basic_disk_info_by_attr(
    identifier: Identifier, attr_name: str, transport: Transport | None = None
) -> str:
    """Return the value of one named attribute of the disk."""
    check_conditions(identifier.dev_path)
    if not attr_name:
        raise ValueError("no attribute name specified to get the value")
    try:
        device = detect_scsi_type(identifier.dev_path, transport)
    except (OSError, SgIOError, ValueError) as err:
        raise OSError(f"error in detecting type of SCSI device, Error: {err}") from err
    with device:
        message = f'error getting "{attr_name}" of disk having devpath "{identifier.dev_path}"'
        try:
            return device.attribute(attr_name)
        except AttributeNotFound as err:
            raise AttributeNotFound(attr_name, f"{message}, error: {err}") from err
        except OSError as err:
            raise OSError(f"{message}, error: {err}") from err