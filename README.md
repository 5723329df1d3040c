# diskprobe

`diskprobe` reads basic details of block devices on Linux. These are the
vendor, model, serial number, firmware revision, SPC compliance, capacity,
sector sizes, WWN, rotation rate, and ATA major/minor version and transport.

It gets them by sending SCSI commands (INQUIRY, READ CAPACITY (10)/(16),
MODE SENSE (6)) through the `SG_IO` ioctl. For ATA disks it sends ATA IDENTIFY
DEVICE through ATA PASS-THROUGH (16). It can also derive disk attributes from a
set of udev properties.

The package has no runtime dependencies. Sending commands to a device needs
`CAP_SYS_RAWIO` or `CAP_SYS_ADMIN`, which in practice means running as root.

## Reading disk details

```python
from diskprobe.smart.types import Identifier
from diskprobe.smart.diskinfo import basic_disk_info, basic_disk_info_by_attr

details, errors = basic_disk_info(Identifier("/dev/sda"))
print(details.vendor, details.model_number, details.capacity)
for key, error in errors.items():
    print(f"{key}: {error}")

print(basic_disk_info_by_attr(Identifier("/dev/sda"), "Vendor"))
```

`basic_disk_info` returns a `DiskAttr` together with a dictionary. The
dictionary maps error keys such as `"SCSIInquiryError"`,
`"SCSIReadcapacityError"`, `"AtaIdentifyError"` or `"errorCheckingConditions"`
to the exception raised in that step. The steps that succeeded still fill their
fields. `DiskAttr.as_dict()` returns the details as a plain dictionary.

`basic_disk_info_by_attr` returns one attribute as a string and raises on
failure:

- `ConditionError` when the path is empty, the capabilities are missing, or the
  bus is not SCSI.
- `ValueError` when no attribute name is given.
- `AttributeNotFound` for an unknown attribute.
- `OSError` for device errors.

The attribute names are the constants in `diskprobe.smart.types`, for example
`"Vendor"`, `"ModelNumber"`, `"SerialNumber"`, `"Capacity"`,
`"LogicalSectorSize"`, `"LuWWNDeviceID"` and `"RPM"`.

Before probing, `check_conditions` (in `diskprobe.smart.common`) does three
checks:

- The path must be non-empty.
- The `CapEff` line of `/proc/self/status` must contain `CAP_SYS_RAWIO` or
  `CAP_SYS_ADMIN`.
- `detect_bus_type` must classify the path as `"SCSI"` (`/dev/sd*`). Paths
  under `/dev/hd*` (IDE) and `/dev/nvmeXnY` (NVMe) are recognised but not
  supported.

### SCSI and SATA devices

`detect_scsi_type(dev_name)` opens the device node and sends an INQUIRY. If
the vendor identification is `ATA`, it returns a `SataDevice`; otherwise it
returns a `ScsiDevice`. Both are context managers:

```python
from diskprobe.smart.device import detect_scsi_type

with detect_scsi_type("/dev/sda") as device:
    print(device.inquiry().values())
    print(device.read_capacity(), device.logical_block_size())
    print(device.attribute("Compliance"))
```

`read_capacity` falls back to READ CAPACITY (16) when the (10) variant reports
an overflow. A `SataDevice` also decodes the IDENTIFY DEVICE page. From it, it
takes:

- the serial number
- the WWN
- the logical and physical sector sizes
- the rotation rate
- the ATA versions and transport

A plain `ScsiDevice` reports only the logical block size, not the physical
sector size.

Every device takes an optional `transport`, a callable
`(fd, cdb, length) -> bytes`. It is used in place of `send_scsi_cdb` from
`diskprobe.smart.sgio`, for example to answer commands from recorded data. The
device node is still opened with `os.open`.

## Decoding pages offline

Raw pages can be parsed without a device:

```python
from diskprobe.smart.ata import AtaIdentifyPage
from diskprobe.smart.inquiry import InquiryResponse

page = AtaIdentifyPage.from_bytes(raw_identify_512_bytes)
print(page.serial_number(), page.wwn(), page.sector_sizes(), page.ata_transport())

inquiry = InquiryResponse.from_bytes(raw_inquiry_bytes)
print(inquiry.values(), inquiry.is_ata())
```

`diskprobe.smart.common` builds READ CAPACITY CDBs and parses their responses.
`diskprobe.smart.sgio` builds MODE SENSE CDBs and packs `sg_io_hdr` structures.

## udev properties

`diskprobe.udev.UdevDevice` works on a mapping of udev properties that you
supply. From it, it derives:

- the disk's unique id: `"disk-"` followed by an MD5 hash; the host name and
  device node are mixed in for virtual disks
- by-id and by-path device links
- the file system (`"None"` when absent)
- the partition type
- the `/sys/dev/block/MAJOR:MINOR` syspath
- whether the device is a disk or a partition

`disk_info()` collects these into a `UdevDiskDetails`.

`os_disk_name`, `os_disk_syspath` and `os_disk_size` read `/proc/self/mounts`
and sysfs to find the disk holding the root file system. They also return its
syspath and its size in sectors.

## Utilities

- `diskprobe.util`: truthy and falsy string checks, int32 parsing, MD5
  hashing, case-insensitive list matching and regex matching.
- `diskprobe.fdset.FdSet`: a select-style bit set of file descriptors.
- `diskprobe.sparsefile`: creates, inspects and deletes sparse files.
- `diskprobe.upgrade.run_upgrade`: runs a series of `Task` objects and raises
  `UpgradeError` at the first one that fails.

## What it does not do

- It does not talk to libudev. It does not enumerate block devices or watch for
  hot-plug events. `UdevDevice` only interprets the properties it is given.
- It does not read SMART attributes.
- It does not probe IDE or NVMe devices.
- It has no command-line interface.