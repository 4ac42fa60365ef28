from collections.abc import Generator
import math
from typing import Any, TypeVar

from sqlalchemy import Engine, event
from sqlalchemy.orm import InstrumentedAttribute
from sqlmodel import Session, SQLModel, create_engine, func, select
from sqlmodel.sql.expression import SelectOfScalar

from polyglot.core.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    if url.startswith("sqlite"):
        # Sessions are handed across FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 5,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


def _sqlite_pragmas(dbapi_connection: Any, _connection_record: Any) -> None:
    # Match PostgreSQL: enforce ON DELETE CASCADE and case-sensitive LIKE
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.execute("PRAGMA case_sensitive_like=ON")
    cursor.close()


def create_db_engine(url: str, **kwargs: Any) -> Engine:
    options = {**_engine_options(url), **kwargs}
    db_engine = create_engine(
        url,
        echo=settings.DEBUG and settings.ENVIRONMENT == "local",
        **options,
    )
    if db_engine.dialect.name == "sqlite":
        event.listen(db_engine, "connect", _sqlite_pragmas)
    return db_engine


engine = create_db_engine(settings.SQLALCHEMY_DATABASE_URI)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db(bind: Engine | None = None) -> None:
    """Create all tables that do not exist yet."""
    # Registers every table on SQLModel.metadata
    from polyglot.languages.models import Language  # noqa: F401
    from polyglot.tags.models import Tag, TagTranslation  # noqa: F401
    from polyglot.translations.models import Translation  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


T = TypeVar("T", bound=SQLModel)


def last_page(total: int, per_page: int) -> int:
    """Number of the final page; an empty result still has page 1."""
    return max(1, math.ceil(total / per_page))


def paginate(
    session: Session,
    statement: SelectOfScalar[T],
    page: int = 1,
    per_page: int = 50,
    order_by: InstrumentedAttribute[Any] | None = None,
) -> tuple[list[T], int]:
    """Execute a paginated query and return results with total count.

    This utility function handles the common pattern of:
    1. Counting total matching records
    2. Fetching one page of results with offset/limit

    Args:
        session: Database session
        statement: Base SQLModel select statement (without pagination)
        page: 1-indexed page number
        per_page: Page size
        order_by: Optional column to order by

    Returns:
        Tuple of (list of results, total count)

    Example:
        statement = select(Translation).where(Translation.group == "emails")
        rows, total = paginate(session, statement, page=2, per_page=50)
    """
    count_statement = select(func.count()).select_from(statement.subquery())
    count = session.exec(count_statement).one()

    if order_by is not None:
        statement = statement.order_by(order_by)

    paginated_statement = statement.offset((page - 1) * per_page).limit(per_page)
    results = session.exec(paginated_statement).all()

    return list(results), count
