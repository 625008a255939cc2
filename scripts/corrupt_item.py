import os

from sqlalchemy import Engine
from sqlmodel import Session, create_engine, select

from inventory.core.codec import ENCRYPTED_FIELDS
from inventory.models.schema import ItemRow
from inventory.shared import load_config

config = load_config()


def attack_item_field(engine: Engine, item_id: str, field: str = "name") -> bool:
    """Overwrite one encrypted field of a stored item with data that is not iv:ciphertext."""
    if field not in ENCRYPTED_FIELDS:
        print(f"[!] Field must be one of: {', '.join(ENCRYPTED_FIELDS)}")
        return False

    with Session(engine) as session:
        item = session.exec(select(ItemRow).where(ItemRow.id == item_id)).one_or_none()
        if not item:
            print(f"[!] No such item: {item_id}")
            return False

        setattr(item, field, os.urandom(16).hex())
        session.add(item)
        session.commit()
        print(f"[✔] Corrupted field '{field}' of item '{item_id}'")
        return True


if __name__ == "__main__":
    import argparse

    def parse_args():
        parser = argparse.ArgumentParser(
            description="Simulate a legacy or corrupt item row"
        )
        parser.add_argument("item_id", type=str, help="Item id to modify")
        parser.add_argument(
            "--field", type=str, default="name", choices=ENCRYPTED_FIELDS
        )
        parser.add_argument("--db", type=str, help="Database URL override")
        return parser.parse_args()

    args = parse_args()
    engine = create_engine(args.db or config.database.url)

    attack_item_field(engine, args.item_id, args.field)
