from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import jwt
from pydantic import ValidationError
from sqlmodel import Session

from polyglot.auth.models import Principal, TokenPayload
from polyglot.core.db import get_db
from polyglot.core.exceptions import AuthenticationError
from polyglot.core.logging import get_logger
from polyglot.core.security import decode_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_current_principal(credentials: TokenDep) -> Principal:
    """Resolve the caller from the Authorization header.

    Args:
        credentials: Parsed ``Authorization: Bearer`` header, if any

    Returns:
        The authenticated principal

    Raises:
        AuthenticationError: If the token is missing, invalid, expired
            or not an access token
    """
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
        token_data = TokenPayload(**payload)
    except (jwt.InvalidTokenError, ValidationError) as e:
        logger.info("token_rejected", reason=type(e).__name__)
        raise AuthenticationError() from e

    if token_data.type != "access":
        raise AuthenticationError(
            "Invalid token type. Use access token for API requests."
        )

    return Principal(subject=token_data.sub, token_id=token_data.jti)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
