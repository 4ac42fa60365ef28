from polyglot.auth.deps import (
    CurrentPrincipal,
    SessionDep,
    TokenDep,
    get_current_principal,
)
from polyglot.auth.models import Principal, TokenPayload

__all__ = [
    # Dependencies
    "CurrentPrincipal",
    "SessionDep",
    "TokenDep",
    "get_current_principal",
    # Models
    "Principal",
    "TokenPayload",
]
