from contextlib import contextmanager

from fastapi import HTTPException

from inventory.core.errors import NotFoundError, ValidationError
from inventory.shared import Logger

__all__ = ["server_error_handler"]

logger = Logger(__name__).get_logger()


@contextmanager
def server_error_handler(failure_message: str, item_id: str | None = None, stacklevel=1):
    """
    Turn item pipeline errors into HTTP errors.

    Validation and missing items keep their message. Anything else is
    logged with context and collapsed to ``failure_message``.
    """
    # Go 3 levels up to escape @contextmanager methods and current function
    stack_level = 2 + stacklevel
    kw = {"stacklevel": stack_level}
    try:
        yield

    except HTTPException:
        raise

    except ValidationError as e:
        logger.warning("Rejected request: %s", e, **kw)
        raise HTTPException(status_code=400, detail=str(e)) from e

    except NotFoundError as e:
        logger.warning("Item %s not found", e.item_id, **kw)
        raise HTTPException(status_code=404, detail="Item not found") from e

    except Exception as e:
        logger.error("%s (id=%s): %r", failure_message, item_id, e, **kw)
        raise HTTPException(status_code=500, detail=failure_message) from e
