from .config import Config, load_config, load_secret_key
from .logger import Logger

__all__ = ["Config", "Logger", "load_config", "load_secret_key"]
