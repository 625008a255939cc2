from logging import CRITICAL, DEBUG, ERROR, INFO, WARNING
from os import PathLike, environ
from pathlib import Path
from tomllib import load

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from inventory.core.errors import ConfigurationError

DEFAULT_CONFIG_PATH = Path(environ.get("INVENTORY_CONFIG", "config.toml"))

SECRET_KEY_ENV = "AES_SECRET_KEY"
SECRET_KEY_HEX_LENGTH = 64


class General(BaseModel):
    title: str


class Database(BaseModel):
    url: str


class Logging(BaseModel):
    level: int

    @field_validator("level", mode="before")
    @classmethod
    def convert_log_level(cls, value):
        if isinstance(value, int):
            return value
        log_levels = {
            "DEBUG": DEBUG,
            "INFO": INFO,
            "WARNING": WARNING,
            "ERROR": ERROR,
            "CRITICAL": CRITICAL,
        }
        return log_levels.get(value.upper(), INFO)


class Paths(BaseModel):
    logs: str


class Auth(BaseModel):
    enabled: bool = True
    token: str


class RateLimit(BaseModel):
    timeout_period: int
    requests_per_second: int


class Network(BaseModel):
    host: str
    port: int
    reload: bool

    rate_limit: RateLimit


class Config(BaseModel):
    general: General
    database: Database
    paths: Paths
    logging: Logging
    auth: Auth
    network: Network


def load_config(
    shared_config_file: PathLike = DEFAULT_CONFIG_PATH,
    specific_config_file: PathLike | None = None,
) -> Config:
    """Load and merge configurations from TOML files."""
    # Load shared config
    with Path(shared_config_file).open("rb") as f:
        config_data = load(f)

    # Specific config replaces whole sections of the shared one
    if specific_config_file:
        with Path(specific_config_file).open("rb") as f:
            specific_data = load(f)
            config_data.update(specific_data)

    return Config(**config_data)


def load_secret_key(env_file: PathLike | None = None) -> bytes:
    """
    Read the AES-256 key from the environment (or a .env file).

    The key is a 64 character hex string. Anything else is a fatal
    startup condition, so this raises ConfigurationError instead of
    letting the first request discover it.
    """
    load_dotenv(env_file)

    secret_key = environ.get(SECRET_KEY_ENV)
    if not secret_key or len(secret_key) != SECRET_KEY_HEX_LENGTH:
        raise ConfigurationError(
            f"{SECRET_KEY_ENV} environment variable is not set "
            f"or is not a {SECRET_KEY_HEX_LENGTH}-character hex string."
        )

    try:
        return bytes.fromhex(secret_key)
    except ValueError as e:
        raise ConfigurationError(f"{SECRET_KEY_ENV} is not valid hex") from e
