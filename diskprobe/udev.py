"""Disk details derived from udev device properties and from sysfs."""

from __future__ import annotations

import os
import socket
from collections.abc import Mapping
from dataclasses import dataclass, field

from .util import hash_string

NDM_DISK_PREFIX = "disk-"
NDM_BLOCK_DEVICE_PREFIX = "blockdevice-"
UDEV_SUBSYSTEM = "block"
UDEV_SYSTEM = "disk"
UDEV_PARTITION = "partition"
UDEV_PATH = "DEVPATH"
UDEV_WWN = "ID_WWN"
UDEV_SERIAL = "ID_SERIAL_SHORT"
UDEV_SERIAL_FULL = "ID_SERIAL"
UDEV_BUS = "ID_BUS"
UDEV_MODEL = "ID_MODEL"
UDEV_VENDOR = "ID_VENDOR"
UDEV_TYPE = "ID_TYPE"
UDEV_MAJOR = "MAJOR"
UDEV_MINOR = "MINOR"
UDEV_UUID = "UDEV_UUID"
UDEV_SYSPATH = "UDEV_SYSPATH"
UDEV_ACTION = "UDEV_ACTION"
UDEV_ACTION_ADD = "add"
UDEV_ACTION_REMOVE = "remove"
UDEV_DEVTYPE = "DEVTYPE"
UDEV_SOURCE = "udev"
UDEV_SYSPATH_PREFIX = "/sys/dev/block/"
UDEV_DEVNAME = "DEVNAME"
UDEV_DEVLINKS = "DEVLINKS"
BY_ID_LINK = "by-id"
BY_PATH_LINK = "by-path"
LINK_ID_INDEX = 4
UDEV_PARTITION_TYPE = "ID_PART_ENTRY_TYPE"
UDEV_FS_TYPE = "ID_FS_TYPE"
UDEV_FS_NONE = "None"

DEFAULT_MOUNTS_PATH = "/proc/self/mounts"
DEFAULT_SYSFS_ROOT = "/sys"

# Virtual disks that share identical attributes across machines.
_LOCAL_DISK_MODELS = frozenset({"EphemeralDisk", "Virtual_disk"})


@dataclass
class UdevDiskDetails:
    """Attributes of a disk as reported by udev."""

    model: str = ""
    serial: str = ""
    vendor: str = ""
    path: str = ""
    by_id_dev_links: list[str] = field(default_factory=list)
    by_path_dev_links: list[str] = field(default_factory=list)
    disk_type: str = ""
    file_system: str = ""
    partition_type: str = ""


@dataclass
class UdevDevice:
    """A block device described by its udev properties.

    ``devtype`` is the device type udev reports; when not given, the
    DEVTYPE property is used.
    """

    properties: Mapping[str, str] = field(default_factory=dict)
    devtype: str | None = None

    def _devtype(self) -> str:
        if self.devtype is not None:
            return self.devtype
        return self.properties.get(UDEV_DEVTYPE, "")

    def disk_info(self) -> UdevDiskDetails:
        """Return the disk attributes udev knows about."""
        links = self.dev_links()
        return UdevDiskDetails(
            model=self.property(UDEV_MODEL),
            serial=self.property(UDEV_SERIAL),
            vendor=self.property(UDEV_VENDOR),
            path=self.property(UDEV_DEVNAME),
            by_id_dev_links=links[BY_ID_LINK],
            by_path_dev_links=links[BY_PATH_LINK],
            disk_type=self._devtype(),
            file_system=self.file_system(),
            partition_type=self.partition_type(),
        )

    def uid(self) -> str:
        """Return a unique id for the disk.

        Disks without an ID_TYPE, and known virtual models, get the host
        name and device node mixed in so identical virtual disks differ.
        """
        uid = (
            self.property(UDEV_WWN)
            + self.property(UDEV_MODEL)
            + self.property(UDEV_SERIAL)
            + self.property(UDEV_VENDOR)
        )
        id_type = self.property(UDEV_TYPE)
        model = self.property(UDEV_MODEL)
        if not id_type or model in _LOCAL_DISK_MODELS:
            try:
                host = socket.gethostname()
            except OSError:
                host = ""
            uid += host + self.property(UDEV_DEVNAME)
        return NDM_DISK_PREFIX + hash_string(uid)

    def is_disk(self) -> bool:
        """Return True if the device is a whole disk."""
        return self._devtype() == UDEV_SYSTEM

    def is_partition(self) -> bool:
        """Return True if the device is a partition."""
        return self._devtype() == UDEV_PARTITION

    def file_system(self) -> str:
        """Return the file system type, or "None" when there is none."""
        return self.property(UDEV_FS_TYPE) or UDEV_FS_NONE

    def partition_type(self) -> str:
        """Return the partition entry type."""
        return self.property(UDEV_PARTITION_TYPE)

    def syspath(self) -> str:
        """Return the /sys/dev/block path built from major and minor numbers."""
        return UDEV_SYSPATH_PREFIX + self.property(UDEV_MAJOR) + ":" + self.property(UDEV_MINOR)

    def dev_links(self) -> dict[str, list[str]]:
        """Return the by-id and by-path device links.

        The by-id link built from bus and serial, when present, comes first.
        """
        by_id: list[str] = []
        by_path: list[str] = []
        bus = self.property(UDEV_BUS)
        serial_full = self.property(UDEV_SERIAL_FULL)
        for link in self.property(UDEV_DEVLINKS).split(" "):
            parts = link.split("/")
            if BY_ID_LINK in parts:
                name = parts[LINK_ID_INDEX] if len(parts) > LINK_ID_INDEX else ""
                if name.startswith(bus) and name.endswith(serial_full):
                    by_id.insert(0, link)
                else:
                    by_id.append(link)
            if BY_PATH_LINK in parts:
                by_path.append(link)
        return {BY_ID_LINK: by_id, BY_PATH_LINK: by_path}

    def property(self, key: str) -> str:
        """Return the value of a udev property, or "" if it is not set."""
        return self.properties.get(key, "")


def os_disk_name(
    mounts_path: str | os.PathLike[str] = DEFAULT_MOUNTS_PATH,
    sysfs_root: str | os.PathLike[str] = DEFAULT_SYSFS_ROOT,
) -> str:
    """Return the kernel name of the disk holding the root file system."""
    part_path = ""
    with open(mounts_path, encoding="utf-8") as handle:
        for line in handle:
            parts = line.rstrip("\n").split(" ")
            if len(parts) > 1 and parts[1] == "/":
                part_path = parts[0]
                break
    if not part_path:
        raise OSError(f"no file system mounted on / in {os.fspath(mounts_path)}")
    part_name = part_path.replace("/dev/", "", 1)
    link = os.readlink(os.path.join(sysfs_root, "class", "block", part_name))
    parts = link.split("/")
    if len(parts) < 2 or parts[-2] != "block":
        link = link.replace("/" + part_name, "", 1)
    return link.split("/")[-1]


def os_disk_syspath(
    disk_name: str, sysfs_root: str | os.PathLike[str] = DEFAULT_SYSFS_ROOT
) -> str:
    """Return the /sys/dev/block syspath of the named disk."""
    with open(os.path.join(sysfs_root, "block", disk_name, "dev"), encoding="utf-8") as handle:
        return UDEV_SYSPATH_PREFIX + handle.read().strip()


def os_disk_size(
    disk_name: str, sysfs_root: str | os.PathLike[str] = DEFAULT_SYSFS_ROOT
) -> str:
    """Return the size of the named disk in 512-byte sectors, as sysfs reports it."""
    with open(os.path.join(sysfs_root, "block", disk_name, "size"), encoding="utf-8") as handle:
        return handle.read().strip()