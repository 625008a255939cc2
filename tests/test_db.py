from concurrent.futures import ThreadPoolExecutor

from sqlalchemy import Engine, inspect
from sqlmodel import Session

from inventory.models.schema import ItemRow
from inventory.shared.db import create_db_engine


def test_db_engine_exists(engine):
    """
    Test that the database engine is created.
    """
    assert engine is not None
    assert isinstance(engine, Engine)


def test_db_schema(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'schema.db'}")

    columns = {column["name"] for column in inspect(engine).get_columns("items")}
    assert columns == {"id", "name", "stock", "price"}

    with Session(engine) as session:
        session.add(ItemRow(id="row-1", name="a:b", stock="c:d", price="e:f"))
        session.commit()

        assert session.get(ItemRow, "row-1").to_row() == {
            "id": "row-1",
            "name": "a:b",
            "stock": "c:d",
            "price": "e:f",
        }


def test_sqlite_connection_shared_across_threads(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'threads.db'}")

    with engine.connect() as connection:
        with ThreadPoolExecutor(max_workers=1) as pool:
            rows = pool.submit(
                lambda: connection.exec_driver_sql("SELECT count(*) FROM items").scalar()
            ).result()

    assert rows == 0
