import argparse
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory.core.cipher import KEY_LENGTH, FieldCipher
from inventory.core.codec import ItemCodec
from inventory.core.store import ItemStore
from inventory.core.table import ItemTable
from inventory.middleware import RateLimit
from inventory.routers import get_routers
from inventory.shared import Config, Logger, load_config, load_secret_key
from inventory.shared.db import create_db_engine

logger = Logger(__name__).get_logger()

config = load_config()


# ================================================================================
#       FastAPI Setup
# ================================================================================
def build_store(config: Config, secret_key: bytes) -> ItemStore:
    engine = create_db_engine(config.database.url)
    codec = ItemCodec(FieldCipher(secret_key))
    return ItemStore(ItemTable(engine), codec)


def create_app(config: Config, store: ItemStore | None = None) -> FastAPI:
    """
    Build the application. The secret key is read here, once, so a
    missing or malformed key stops startup instead of failing requests.
    """
    if store is None:
        store = build_store(config, load_secret_key())

    app = FastAPI(title="Inventory")
    app.state.config = config
    app.state.store = store

    for router in get_routers():
        app.include_router(router)

    app.add_middleware(
        RateLimit,
        timeout_period_s=config.network.rate_limit.timeout_period,
        max_per_second=config.network.rate_limit.requests_per_second,
    )

    # Added last so it wraps everything, rate limited responses included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["Content-Type", "Authorization"],
    )

    return app


def default_app() -> FastAPI:
    """Application factory used by uvicorn."""
    return create_app(config)


# ================================================================================
#       Command Line
# ================================================================================
def welcome():
    # Log server banner
    for line in config.general.title.split("\n"):
        logger.info(line)

    logger.info("Starting inventory server")


def generate_key() -> str:
    return os.urandom(KEY_LENGTH).hex()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Encrypted inventory service")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("serve", help="Run the HTTP server (default)")
    subparsers.add_parser(
        "generate-key", help="Print a new 64 character hex AES_SECRET_KEY"
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    if args.command == "generate-key":
        print(generate_key())
        return

    # Refuse to start without a usable key
    load_secret_key()

    welcome()

    import uvicorn

    uvicorn.run(
        "inventory.main:default_app",
        factory=True,
        host=config.network.host,
        port=config.network.port,
        reload=config.network.reload,
    )


if __name__ == "__main__":
    main()
