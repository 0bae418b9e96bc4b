# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/__main__.py
from __future__ import annotations

import logging
import sys
import traceback
from typing import Optional, Sequence

from .cli import parse_args_with_config, run_command
from .core.exceptions import Fatal, FusionCtlError, format_exception_for_cli


def _print_stderr(msg: str) -> None:
    print(msg, file=sys.stderr)


def main(argv: Optional[Sequence[str]] = None) -> int:
    logger: Optional[logging.Logger] = None

    # Phase 1: parse (Fatal can happen here, e.g. a broken config file)
    try:
        args, _conf, logger = parse_args_with_config(argv)
    except Fatal as e:
        # Config loader already logged it.
        return e.code
    except KeyboardInterrupt:
        _print_stderr("Interrupted by user (Ctrl+C).")
        return 130

    # Phase 2: run the command
    try:
        return run_command(logger, args)
    except FusionCtlError as e:
        logger.error("%s", format_exception_for_cli(e, verbose=args.verbose))
        return e.code
    except OSError as e:
        # verify() lets non-"not found" filesystem errors through untouched.
        logger.error("%s", format_exception_for_cli(e, verbose=2))
        return 40
    except KeyboardInterrupt:
        logger.warning("Interrupted by user (Ctrl+C).")
        return 130
    except Exception as e:
        logger.error("💥 UNHANDLED %s: %s", type(e).__name__, e)
        logger.debug(traceback.format_exc())
        return 1


if __name__ == "__main__":
    sys.exit(main())
