# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/drivers/__init__.py
"""Hypervisor drivers and lookup by name."""
from __future__ import annotations

import logging
from typing import Dict, Optional, Type

from ..core.exceptions import Fatal
from .base import Driver
from .fusion import Fusion5Driver

DRIVERS: Dict[str, Type[Driver]] = {
    "fusion5": Fusion5Driver,
}

DEFAULT_DRIVER = "fusion5"


def new_driver(name: str, app_path: str, logger: Optional[logging.Logger] = None) -> Driver:
    try:
        cls = DRIVERS[name]
    except KeyError:
        known = ", ".join(sorted(DRIVERS))
        raise Fatal(msg=f"Unknown driver {name!r} (known: {known})").with_context(driver=name)
    return cls(app_path, logger=logger)


__all__ = ["DEFAULT_DRIVER", "DRIVERS", "Driver", "Fusion5Driver", "new_driver"]
