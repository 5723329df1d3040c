"""SCSI INQUIRY, READ CAPACITY and ATA IDENTIFY handling for SCSI and SATA disks."""