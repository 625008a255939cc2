import hmac
from typing import Annotated

from fastapi import Header, HTTPException, Request

from inventory.shared import Logger

logger = Logger(__name__).get_logger()

BEARER_PREFIX = "Bearer "
PRINCIPAL = "user"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=401,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_bearer_token(
    request: Request,
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """
    Checks the request token against the configured one.
    Raises HTTPException(401) when the token is missing or wrong.
    """
    auth_config = request.app.state.config.auth
    if not auth_config.enabled:
        return PRINCIPAL

    if not authorization:
        logger.warning("Missing authorization token")
        raise _unauthorized()

    token = authorization.removeprefix(BEARER_PREFIX)

    if not hmac.compare_digest(token.encode(), auth_config.token.encode()):
        logger.warning("Invalid token")
        raise _unauthorized()

    logger.debug("Token validated successfully.")
    return PRINCIPAL
