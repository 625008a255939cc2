import json
from collections.abc import Awaitable, Callable
from typing import TypeAlias, TypeVar

from fastapi import HTTPException, Request
from pydantic import BaseModel

from inventory.shared import Logger

logger = Logger(__name__).get_logger()

T = TypeVar("T", bound=BaseModel)

UnwrapHandler: TypeAlias = Callable[[Request], Awaitable[T]]


class JsonBody:
    """FastAPI dependencies that parse a JSON request body into a model, or 400."""

    @classmethod
    def unwrap(cls, output_type: type[T]) -> UnwrapHandler[T]:
        logger.debug("Creating unwrap handler for output type: %s", output_type.__name__)

        async def unwrap_handler(request: Request) -> T:
            body = await request.body()
            if not body.strip():
                logger.warning("Request body is empty")
                raise HTTPException(status_code=400, detail="Request body is empty")

            try:
                result = output_type.model_validate(json.loads(body))
                logger.debug("Unwrapped body into %s instance.", output_type.__name__)
                return result

            # pydantic's ValidationError is a ValueError too
            except (ValueError, json.JSONDecodeError) as e:
                logger.warning("Failed to unwrap body: %s", e)
                raise HTTPException(
                    status_code=400,
                    detail=f"Invalid payload: {e}",
                ) from e

        return unwrap_handler
