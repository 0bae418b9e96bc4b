# fusionctl/cli/__init__.py
from .commands import COMMANDS, run_command
from .parser import build_parser, parse_args_with_config

__all__ = ["COMMANDS", "build_parser", "parse_args_with_config", "run_command"]
