# SPDX-License-Identifier: GPL-2.0-or-later
import os
import stat
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent

if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

os.environ.setdefault("PYTHONPATH", str(_REPO_ROOT))


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no subprocesses")
    config.addinivalue_line("markers", "integration: tests that spawn stand-in vendor tools")


# Stand-in for the vendor tools: records argv (one arg per line, "--" between
# calls), prints the canned listing for "list", honours FAKE_TOOL_EXIT.
_FAKE_TOOL = """#!/bin/sh
printf '%s\\n' "$@" >> "{calls}"
echo "--" >> "{calls}"
if [ "$3" = "list" ]; then
  cat "{listing}"
fi
if [ -n "$FAKE_TOOL_STDERR" ]; then
  echo "$FAKE_TOOL_STDERR" >&2
fi
exit ${{FAKE_TOOL_EXIT:-0}}
"""


def _read_calls(calls: Path):
    if not calls.exists():
        return []
    out, cur = [], []
    for line in calls.read_text(encoding="utf-8").split("\n"):
        if line == "--":
            out.append(cur)
            cur = []
        elif line:
            cur.append(line)
    return out


@pytest.fixture
def fusion_bundle(tmp_path):
    """A fake "VMware Fusion.app" whose tools are shell scripts."""
    app = tmp_path / "VMware Fusion.app"
    lib = app / "Contents" / "Library"
    lib.mkdir(parents=True)

    calls = tmp_path / "calls.txt"
    listing = tmp_path / "listing.txt"
    listing.write_text("Total running VMs: 0\n", encoding="utf-8")

    for name in ("vmrun", "vmware-vdiskmanager"):
        tool = lib / name
        tool.write_text(_FAKE_TOOL.format(calls=calls, listing=listing), encoding="utf-8")
        tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

    def set_running(*vmx_paths):
        lines = [f"Total running VMs: {len(vmx_paths)}", *vmx_paths]
        listing.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def set_listing_bytes(raw: bytes):
        listing.write_bytes(raw)

    return SimpleNamespace(
        app=str(app),
        lib=lib,
        calls=lambda: _read_calls(calls),
        set_running=set_running,
        set_listing_bytes=set_listing_bytes,
    )
