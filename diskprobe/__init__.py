"""Read basic disk details over SCSI generic and from udev properties."""

__version__ = "0.1.0"