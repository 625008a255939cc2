import os

# The key must be in place before the application modules are imported
TEST_SECRET_KEY_HEX = "00112233445566778899aabbccddeeff" * 2
os.environ.setdefault("AES_SECRET_KEY", TEST_SECRET_KEY_HEX)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from inventory.core.cipher import FieldCipher  # noqa: E402
from inventory.core.codec import ItemCodec  # noqa: E402
from inventory.core.store import ItemStore  # noqa: E402
from inventory.core.table import ItemTable  # noqa: E402
from inventory.main import create_app  # noqa: E402
from inventory.shared import Config, load_config  # noqa: E402
from inventory.shared.db import create_db_engine  # noqa: E402

TEST_TOKEN = "test-token"


@pytest.fixture(scope="session")
def secret_key() -> bytes:
    return bytes.fromhex(TEST_SECRET_KEY_HEX)


@pytest.fixture
def cipher(secret_key):
    return FieldCipher(secret_key)


@pytest.fixture
def codec(cipher):
    return ItemCodec(cipher)


@pytest.fixture
def engine(tmp_path):
    return create_db_engine(f"sqlite:///{tmp_path / 'items.db'}")


@pytest.fixture
def table(engine):
    return ItemTable(engine)


@pytest.fixture
def store(table, codec):
    return ItemStore(table, codec)


def make_config(**sections) -> Config:
    """The shared config.toml with some sections replaced."""
    data = load_config().model_dump()
    data["auth"] = {"enabled": True, "token": TEST_TOKEN}
    data["network"]["rate_limit"] = {"timeout_period": 1, "requests_per_second": 1000}
    for name, values in sections.items():
        data[name] = values
    return Config(**data)


@pytest.fixture
def test_config() -> Config:
    return make_config()


@pytest.fixture
def client(test_config, store):
    app = create_app(test_config, store)
    return TestClient(app, headers={"Authorization": f"Bearer {TEST_TOKEN}"})


@pytest.fixture
def auth_token() -> str:
    return TEST_TOKEN


@pytest.fixture
def config_factory():
    return make_config
