# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/drivers/base.py
"""Driver contract: the operations a builder needs from a desktop hypervisor."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..core.logger import Log


class Driver(ABC):
    """
    A driver talks to a virtualization product and controls virtual machines
    identified by the path to their VMX file.

    Drivers hold configuration only; every call is a one-shot operation.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or Log.get()

    @abstractmethod
    def create_disk(self, output_path: str, size: str) -> None:
        """Create a virtual disk of ``size`` (e.g. "40000MB") at ``output_path``."""

    @abstractmethod
    def is_running(self, vmx_path: str) -> bool:
        """Whether the VM described by ``vmx_path`` is running."""

    @abstractmethod
    def start(self, vmx_path: str) -> None:
        """Power on the VM."""

    @abstractmethod
    def stop(self, vmx_path: str) -> None:
        """Power off the VM."""

    @abstractmethod
    def verify(self) -> None:
        """
        Check that every file this driver relies on appears to exist.

        Returns None when the driver should function; raises otherwise.
        """
