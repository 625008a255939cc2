from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from inventory.core.auth import require_bearer_token
from inventory.core.store import ItemStore
from inventory.models.requests import ItemCreate, ItemCreatedResponse, ItemUpdate, JsonBody
from inventory.shared import Logger
from inventory.shared.http import server_error_handler

logger = Logger(__name__).get_logger()

router = APIRouter(dependencies=[Depends(require_bearer_token)])


def get_item_store(request: Request) -> ItemStore:
    return request.app.state.store


StoreDep = Annotated[ItemStore, Depends(get_item_store)]


def require_item_id(item_id: Annotated[str | None, Query(alias="id")] = None) -> str:
    if not item_id:
        logger.warning("Missing required query parameter: id")
        raise HTTPException(status_code=400, detail="Missing required query parameter: id")
    return item_id


# Declared before the body so a missing id is reported first
ItemIdDep = Annotated[str, Depends(require_item_id)]


@router.post("/items", status_code=201, response_model=ItemCreatedResponse)
async def create_item(
    data: Annotated[ItemCreate, Depends(JsonBody.unwrap(ItemCreate))],
    store: StoreDep,
):
    """
    Create an item. All of name, stock and price are required;
    0 is a valid stock or price.
    """
    with server_error_handler("Failed to create item"):
        item = store.create(data.model_dump(exclude_unset=True))

    response = ItemCreatedResponse(message="Item created successfully", **item.to_dict())
    return JSONResponse(status_code=201, content=response.model_dump())


@router.get("/items")
async def list_items(store: StoreDep, name: str | None = None):
    """
    List items, optionally those whose name contains ``name``.
    Rows that cannot be decrypted are returned as stored.
    """
    with server_error_handler("Failed to retrieve items"):
        items = store.read(name=name)

    return JSONResponse(content=[item.to_dict() for item in items])


@router.put("/items")
async def update_item(
    item_id: ItemIdDep,
    data: Annotated[ItemUpdate, Depends(JsonBody.unwrap(ItemUpdate))],
    store: StoreDep,
):
    with server_error_handler("Failed to update item", item_id=item_id):
        item = store.update(item_id, data.model_dump(exclude_unset=True))

    return JSONResponse(
        content={"message": "Item updated successfully", "item": item.to_dict()}
    )


@router.delete("/items")
async def delete_item(item_id: ItemIdDep, store: StoreDep):
    with server_error_handler("Failed to delete item", item_id=item_id):
        deleted = store.delete(item_id)

    return JSONResponse(
        content={"message": "Item deleted successfully", "deletedItem": deleted.to_dict()}
    )
