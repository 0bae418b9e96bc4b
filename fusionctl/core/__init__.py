# fusionctl/core/__init__.py
from .exceptions import Fatal, FusionCtlError, PathResolutionError, ProcessError, VerificationError
from .logger import Log

__all__ = ["Fatal", "FusionCtlError", "Log", "PathResolutionError", "ProcessError", "VerificationError"]
