# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/cli/parser.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Optional, Sequence, Tuple

from ..config.config_loader import APP_PATH_ENV, DEFAULT_APP_PATH, Config
from ..core.logger import Log, c
from ..core.utils import U
from ..drivers import DEFAULT_DRIVER, DRIVERS

_EPILOG = f"""
Examples:
  fusionctl verify
  fusionctl --app-path "/Applications/VMware Fusion.app" is-running ~/vms/build/build.vmx
  fusionctl create-disk ~/vms/build/disk.vmdk 40000MB
  fusionctl --config fusion.yaml start ~/vms/build/build.vmx

Config files (YAML or JSON) may set any global option, e.g.:
  app_path: /Applications/VMware Fusion.app
  driver: fusion5
  verbose: 2

The bundle path defaults to ${APP_PATH_ENV}, then "{DEFAULT_APP_PATH}".
"""


def _add_global_config_logging(p: argparse.ArgumentParser) -> None:
    from .. import __version__

    p.add_argument(
        "--config",
        action="append",
        default=[],
        help="YAML/JSON config file (repeatable; later overrides earlier).",
    )
    p.add_argument("--dump-config", action="store_true", help="Print merged config and exit.")
    p.add_argument("--version", action="version", version=__version__)
    p.add_argument("-v", "--verbose", action="count", default=0, help="Verbosity: -v, -vv, -vvv")
    p.add_argument("-q", "--quiet", action="count", default=0, help="Less output: -q, -qq")
    p.add_argument("--log-file", dest="log_file", default=None, help="Write logs to file.")
    p.add_argument("--json-logs", dest="json_logs", action="store_true", help="Emit NDJSON logs on stderr.")


def _add_driver_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--driver",
        dest="driver",
        default=DEFAULT_DRIVER,
        choices=sorted(DRIVERS),
        help="Hypervisor driver.",
    )
    p.add_argument(
        "--app-path",
        dest="app_path",
        default=None,
        help='Path to the "VMware Fusion.app" bundle.',
    )


def _add_commands(p: argparse.ArgumentParser) -> None:
    sub = p.add_subparsers(dest="cmd", required=True, metavar="COMMAND")

    sub.add_parser("verify", help="Check that Fusion and its command-line tools are installed.")

    pcd = sub.add_parser("create-disk", help="Create a virtual disk with vmware-vdiskmanager.")
    pcd.add_argument("output", help="Path of the .vmdk to create.")
    pcd.add_argument("size", help='Disk size in vdiskmanager syntax, e.g. "40000MB".')

    pir = sub.add_parser("is-running", help="Exit 0 if the VM is running, 1 if not.")
    pir.add_argument("vmx", help="Path to the VM's .vmx file.")

    pst = sub.add_parser("start", help="Power on a VM (opens a GUI console).")
    pst.add_argument("vmx", help="Path to the VM's .vmx file.")

    psp = sub.add_parser("stop", help="Hard power off a VM.")
    psp.add_argument("vmx", help="Path to the VM's .vmx file.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fusionctl",
        description=c("fusionctl: drive VMware Fusion through vmrun and vmware-vdiskmanager", "green", ["bold"]),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=_EPILOG,
    )
    _add_global_config_logging(p)
    _add_driver_options(p)
    _add_commands(p)
    return p


def _build_preparser() -> argparse.ArgumentParser:
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", action="append", default=[])
    pre.add_argument("-v", "--verbose", action="count", default=0)
    pre.add_argument("-q", "--quiet", action="count", default=0)
    pre.add_argument("--log-file", dest="log_file", default=None)
    pre.add_argument("--json-logs", dest="json_logs", action="store_true")
    pre.add_argument("--dump-config", action="store_true")
    return pre


def _load_merged_config(logger: logging.Logger, cfgs: Sequence[str]) -> Dict[str, Any]:
    if not cfgs:
        return {}
    expanded = Config.expand_configs(logger, list(cfgs))
    return Config.load_many(logger, expanded)


def parse_args_with_config(
    argv: Optional[Sequence[str]] = None,
    logger: Optional[logging.Logger] = None,
) -> Tuple[argparse.Namespace, Dict[str, Any], logging.Logger]:
    """
    Flow:
      Phase 0: parse ONLY global flags needed to locate config/logging
      Phase 1: load+merge config files
      Phase 2: apply config as defaults onto the parser
      Phase 3: full parse to get final args
      Phase 4: reconfigure logging if config changed it
    """
    if argv is None:
        argv = sys.argv[1:]
    argv = list(argv)

    parser = build_parser()

    pre = _build_preparser()
    args0, _rest = pre.parse_known_args(argv)

    own_logger = logger is None
    if logger is None:
        logger = Log.setup(args0.verbose, args0.log_file, quiet=args0.quiet, json_logs=args0.json_logs)

    conf = _load_merged_config(logger, args0.config)

    if args0.dump_config:
        print(U.json_dump(conf))
        raise SystemExit(0)

    Config.apply_as_defaults(logger, parser, conf)
    args = parser.parse_args(argv)

    if own_logger and (args.verbose, args.quiet, args.log_file, args.json_logs) != (
        args0.verbose,
        args0.quiet,
        args0.log_file,
        args0.json_logs,
    ):
        logger = Log.setup(args.verbose, args.log_file, quiet=args.quiet, json_logs=args.json_logs)

    return args, conf, logger
