#!/usr/bin/env python3
# SPDX-License-Identifier: LGPL-3.0-or-later
"""
Example: drive a VMware Fusion build VM from Python using the fusionctl library.

This example demonstrates:
- Verifying the Fusion installation
- Creating the build disk
- Starting the VM and waiting for the guest to power itself off
- Forcing it off if it overruns

Usage:
    python library_fusion_build.py /path/to/build.vmx /path/to/disk.vmdk [timeout_s]
"""

import logging
import sys
import time

from fusionctl import Fusion5Driver, FusionCtlError

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def run_build(vmx_path: str, disk_path: str, timeout_s: float = 1800.0) -> bool:
    """Run one build VM to completion. Returns True if the guest shut down by itself."""
    driver = Fusion5Driver("/Applications/VMware Fusion.app", logger=logger)

    driver.verify()
    driver.create_disk(disk_path, "40000MB")
    driver.start(vmx_path)

    deadline = time.time() + timeout_s
    while time.time() < deadline:
        if not driver.is_running(vmx_path):
            logger.info("Guest powered off on its own")
            return True
        time.sleep(5)

    logger.warning("Guest still running after %.0fs, forcing power off", timeout_s)
    driver.stop(vmx_path)
    return False


def main():
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(1)

    timeout_s = float(sys.argv[3]) if len(sys.argv) > 3 else 1800.0

    try:
        ok = run_build(sys.argv[1], sys.argv[2], timeout_s)
    except FusionCtlError as e:
        logger.error(f"Build failed: {e}")
        sys.exit(e.code)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
