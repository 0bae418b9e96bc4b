# fusionctl/config/__init__.py
from .config_loader import APP_PATH_ENV, DEFAULT_APP_PATH, Config, FusionCtlConfig

__all__ = ["APP_PATH_ENV", "DEFAULT_APP_PATH", "Config", "FusionCtlConfig"]
