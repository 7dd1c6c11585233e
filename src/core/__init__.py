from core.utils import debug, info, warn, error
from core.config import Config, load_config

__all__ = [
    "debug",
    "info",
    "warn",
    "error",
    "Config",
    "load_config",
]
