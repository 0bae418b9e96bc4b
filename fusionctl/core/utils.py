# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/core/utils.py
from __future__ import annotations

import json
import logging
import shlex
import subprocess
from typing import Any, List, Sequence

from .exceptions import Fatal, ProcessError


class U:
    @staticmethod
    def die(logger: logging.Logger, msg: str, code: int = 1) -> None:
        logger.error(msg)
        raise Fatal(code, msg)

    @staticmethod
    def json_dump(obj: Any) -> str:
        return json.dumps(obj, indent=2, sort_keys=True, default=str)

    @staticmethod
    def to_text(x: Any) -> str:
        # surrogateescape keeps undecodable bytes distinct, matching os.fsdecode()
        if x is None:
            return ""
        if isinstance(x, bytes):
            return x.decode("utf-8", "surrogateescape")
        return str(x)

    @staticmethod
    def printable(s: str) -> str:
        return s.encode("utf-8", "backslashreplace").decode("utf-8")

    @staticmethod
    def _pretty_cmd(cmd: Sequence[str]) -> str:
        return " ".join(shlex.quote(str(x)) for x in cmd)

    @staticmethod
    def run_and_log(logger: logging.Logger, cmd: List[str]) -> subprocess.CompletedProcess:
        """
        Run a vendor tool to completion and log what happened.

        stdout and stderr are captured as bytes into separate buffers and decoded
        without newline translation, so carriage returns survive. The command is logged
        before it runs and both trimmed buffers after it exits. There is
        no timeout: a hung tool blocks the caller.

        Raises ProcessError on launch failure or non-zero exit; the error carries
        both captured buffers.
        """
        logger.info("Executing: %s %s", cmd[0], list(cmd[1:]))

        try:
            cp = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            logger.error("Command error: %s (%s)", U._pretty_cmd(cmd), e)
            raise ProcessError(
                msg=f"Failed to launch {cmd[0]}: {e}",
                cause=e,
                cmd=list(cmd),
            ) from e

        stdout = U.to_text(cp.stdout)
        stderr = U.to_text(cp.stderr)
        logger.info("stdout: %s", U.printable(stdout.strip()))
        logger.info("stderr: %s", U.printable(stderr.strip()))

        if cp.returncode != 0:
            detail = U.printable(stderr.strip()) or "(no stderr)"
            raise ProcessError(
                msg=f"Command failed with exit code {cp.returncode}: {U._pretty_cmd(cmd)}: {detail}",
                cmd=list(cmd),
                returncode=cp.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return subprocess.CompletedProcess(cmd, cp.returncode, stdout=stdout, stderr=stderr)
