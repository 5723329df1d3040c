[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "diskprobe"
version = "0.1.0"
description = "Read basic disk details over SCSI generic and SCSI-ATA translation, and from udev properties"
requires-python = ">=3.10"
dependencies = []
keywords = ["disk", "scsi", "ata", "sg_io", "udev", "block-device", "inquiry", "identify"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["diskprobe"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
