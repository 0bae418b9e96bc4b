# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/__init__.py
"""
fusionctl - VMware Fusion driver for image builders

Drives a local VMware Fusion install through the command-line tools in its
application bundle (vmrun, vmware-vdiskmanager).

Usage as a library:

    from fusionctl import Fusion5Driver

    driver = Fusion5Driver("/Applications/VMware Fusion.app")
    driver.verify()
    driver.create_disk("/tmp/build/disk.vmdk", "40000MB")
    driver.start("/tmp/build/build.vmx")
    if driver.is_running("/tmp/build/build.vmx"):
        driver.stop("/tmp/build/build.vmx")
"""

__version__ = "0.1.0"

from .core.exceptions import (
    Fatal,
    FusionCtlError,
    PathResolutionError,
    ProcessError,
    VerificationError,
)
from .drivers import DRIVERS, Driver, Fusion5Driver, new_driver

__all__ = [
    "__version__",
    "DRIVERS",
    "Driver",
    "Fatal",
    "Fusion5Driver",
    "FusionCtlError",
    "PathResolutionError",
    "ProcessError",
    "VerificationError",
    "new_driver",
]
