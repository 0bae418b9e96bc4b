# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/drivers/fusion.py
from __future__ import annotations

"""
VMware Fusion 5 driver.

Wraps the two tools shipped inside the Fusion application bundle:

  <app>/Contents/Library/vmrun                 start/stop/list VMs
  <app>/Contents/Library/vmware-vdiskmanager   create virtual disks

Argument order on every command line is fixed by the vendor tools.
"""

import logging
import os
from typing import List, Optional

from ..core.exceptions import PathResolutionError, VerificationError
from ..core.utils import U
from .base import Driver

_LIBRARY_SUBPATH = ("Contents", "Library")
VMRUN = "vmrun"
VDISKMANAGER = "vmware-vdiskmanager"

# vdiskmanager -a/-t values, as numbered by the vendor
DISK_ADAPTER = "lsilogic"
DISK_TYPE = "1"


class Fusion5Driver(Driver):
    """Driver for VMware Fusion 5, rooted at the "VMware Fusion.app" bundle."""

    def __init__(self, app_path: str, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self._app_path = str(app_path)

    @property
    def app_path(self) -> str:
        return self._app_path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(app_path={self._app_path!r})"

    # ------------------------------------------------------------------
    # Tool locations (recomputed per call)
    # ------------------------------------------------------------------

    def vmrun_path(self) -> str:
        return os.path.join(self._app_path, *_LIBRARY_SUBPATH, VMRUN)

    def vdisk_manager_path(self) -> str:
        return os.path.join(self._app_path, *_LIBRARY_SUBPATH, VDISKMANAGER)

    def _vmrun(self, *args: str) -> List[str]:
        return [self.vmrun_path(), "-T", "fusion", *args]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def create_disk(self, output_path: str, size: str) -> None:
        cmd = [self.vdisk_manager_path(), "-c", "-s", size, "-a", DISK_ADAPTER, "-t", DISK_TYPE, output_path]
        U.run_and_log(self.logger, cmd)

    def is_running(self, vmx_path: str) -> bool:
        try:
            vmx_path = os.path.abspath(vmx_path)
        except OSError as e:
            raise PathResolutionError(
                msg=f"Cannot resolve absolute path for {vmx_path}: {e}",
                cause=e,
                path=vmx_path,
            ) from e

        cp = U.run_and_log(self.logger, self._vmrun("list"))

        # vmrun prints a count header followed by one VMX path per line.
        # Only an exact line match counts.
        for line in cp.stdout.split("\n"):
            if line == vmx_path:
                return True

        return False

    def start(self, vmx_path: str) -> None:
        U.run_and_log(self.logger, self._vmrun("start", vmx_path, "gui"))

    def stop(self, vmx_path: str) -> None:
        U.run_and_log(self.logger, self._vmrun("stop", vmx_path, "hard"))

    def verify(self) -> None:
        _require(
            self._app_path,
            missing="application",
            msg=f"Fusion application not found at path: {self._app_path}",
        )

        vmrun = self.vmrun_path()
        _require(
            vmrun,
            missing="vmrun",
            msg=f"Critical application 'vmrun' not found at path: {vmrun}",
        )

        vdiskmanager = self.vdisk_manager_path()
        _require(
            vdiskmanager,
            missing="vdiskmanager",
            msg=f"Critical application vdisk manager not found at path: {vdiskmanager}",
        )


def _require(path: str, *, missing: str, msg: str) -> None:
    # Only "does not exist" is reclassified; PermissionError and friends propagate.
    try:
        os.stat(path)
    except FileNotFoundError as e:
        raise VerificationError(msg=msg, cause=e, missing=missing, path=path) from e
