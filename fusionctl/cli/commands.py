# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/cli/commands.py
from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, Optional

from rich.console import Console

from ..config.config_loader import FusionCtlConfig
from ..drivers import Driver, new_driver

Handler = Callable[[Driver, argparse.Namespace, Console], int]


def _verify(driver: Driver, args: argparse.Namespace, con: Console) -> int:
    driver.verify()
    con.print(f"[green]✓[/green] Fusion installation OK: {getattr(driver, 'app_path', '')}", highlight=False)
    return 0


def _create_disk(driver: Driver, args: argparse.Namespace, con: Console) -> int:
    driver.create_disk(args.output, args.size)
    con.print(f"[green]✓[/green] Created disk {args.output} ({args.size})", highlight=False)
    return 0


def _is_running(driver: Driver, args: argparse.Namespace, con: Console) -> int:
    running = driver.is_running(args.vmx)
    con.print("running" if running else "not running", highlight=False)
    return 0 if running else 1


def _start(driver: Driver, args: argparse.Namespace, con: Console) -> int:
    driver.start(args.vmx)
    con.print(f"[green]✓[/green] Started {args.vmx}", highlight=False)
    return 0


def _stop(driver: Driver, args: argparse.Namespace, con: Console) -> int:
    driver.stop(args.vmx)
    con.print(f"[green]✓[/green] Stopped {args.vmx}", highlight=False)
    return 0


COMMANDS: Dict[str, Handler] = {
    "verify": _verify,
    "create-disk": _create_disk,
    "is-running": _is_running,
    "start": _start,
    "stop": _stop,
}


def run_command(
    logger: logging.Logger,
    args: argparse.Namespace,
    *,
    console: Optional[Console] = None,
) -> int:
    """Build the configured driver and dispatch ``args.cmd`` to it. Returns the exit code."""
    cfg = FusionCtlConfig.from_mapping(vars(args))
    driver = new_driver(cfg.driver, cfg.app_path, logger=logger)
    logger.debug("Using %r for command %s", driver, args.cmd)
    return COMMANDS[args.cmd](driver, args, console or Console())
