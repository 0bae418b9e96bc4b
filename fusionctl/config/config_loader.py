# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# fusionctl/config/config_loader.py
from __future__ import annotations

import argparse
import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from ..core.exceptions import Fatal
from ..core.utils import U

DEFAULT_APP_PATH = "/Applications/VMware Fusion.app"
APP_PATH_ENV = "FUSIONCTL_APP_PATH"


def _deep_merge(base: Dict[str, Any], over: Mapping[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in over.items():
        if isinstance(v, Mapping) and isinstance(out.get(k), Mapping):
            out[k] = _deep_merge(dict(out[k]), v)
        else:
            out[k] = v
    return out


def _norm_key(k: Any) -> str:
    return str(k).strip().replace("-", "_")


class Config:
    """
    YAML/JSON config files layered under the CLI.

    Files are merged in order (later wins), then applied as argparse defaults
    so explicit flags still override them.
    """

    @staticmethod
    def expand_configs(logger: logging.Logger, paths: Sequence[str]) -> List[Path]:
        out: List[Path] = []
        for raw in paths:
            p = Path(os.path.expandvars(str(raw))).expanduser().resolve()
            if not p.is_file():
                U.die(logger, f"Config file not found: {p}", 2)
            out.append(p)
        return out

    @staticmethod
    def load_file(logger: logging.Logger, path: Path) -> Dict[str, Any]:
        text = path.read_text(encoding="utf-8")
        try:
            if path.suffix.lower() == ".json":
                data = json.loads(text) if text.strip() else {}
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error("Cannot parse config %s: %s", path, e)
            raise Fatal(2, f"Cannot parse config {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, Mapping):
            U.die(logger, f"Config {path} must contain a mapping at the top level, got {type(data).__name__}", 2)

        logger.debug("Loaded config %s (%d keys)", path, len(data))
        return {_norm_key(k): v for k, v in data.items()}

    @staticmethod
    def load_many(logger: logging.Logger, paths: Sequence[Path]) -> Dict[str, Any]:
        conf: Dict[str, Any] = {}
        for p in paths:
            conf = _deep_merge(conf, Config.load_file(logger, p))
        return conf

    @staticmethod
    def apply_as_defaults(logger: logging.Logger, parser: argparse.ArgumentParser, conf: Mapping[str, Any]) -> None:
        known = {a.dest for a in parser._actions}
        defaults: Dict[str, Any] = {}
        for k, v in conf.items():
            key = _norm_key(k)
            if key in known:
                defaults[key] = v
            else:
                logger.debug("Ignoring unknown config key: %s", k)
        if defaults:
            parser.set_defaults(**defaults)


@dataclass(frozen=True)
class FusionCtlConfig:
    """Resolved settings used to build a driver."""

    driver: str = "fusion5"
    app_path: str = DEFAULT_APP_PATH
    verbose: int = 0
    quiet: int = 0
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], env: Optional[Mapping[str, str]] = None) -> "FusionCtlConfig":
        """
        Build from a merged config mapping or ``vars(args)``.

        Unknown keys are ignored. A missing/empty app_path falls back to
        $FUSIONCTL_APP_PATH, then the stock install location.
        """
        env = os.environ if env is None else env
        names = {f.name for f in fields(cls)}
        kw = {k: v for k, v in ((_norm_key(k), v) for k, v in data.items()) if k in names and v is not None}
        if not kw.get("app_path"):
            kw["app_path"] = env.get(APP_PATH_ENV) or DEFAULT_APP_PATH
        return cls(**kw)
