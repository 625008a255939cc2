from sqlmodel import Field, SQLModel


class ItemRow(SQLModel, table=True):
    """At-rest layout of an item. Every field but ``id`` holds ``iv:ciphertext``."""

    __tablename__ = "items"

    id: str = Field(..., primary_key=True, description="Generated item identifier")
    name: str = Field(..., description="Encrypted item name")
    stock: str = Field(..., description="Encrypted stock count")
    price: str = Field(..., description="Encrypted unit price")

    def to_row(self) -> dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "stock": self.stock,
            "price": self.price,
        }
