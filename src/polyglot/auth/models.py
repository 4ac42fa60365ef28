from sqlmodel import SQLModel


class TokenPayload(SQLModel):
    sub: str
    type: str = "access"
    jti: str | None = None


class Principal(SQLModel):
    """Caller identity taken from a verified bearer token."""

    subject: str
    token_id: str | None = None
