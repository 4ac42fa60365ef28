from polyglot.core.config import Settings


def test_database_url_overrides_postgres_settings():
    config = Settings(DATABASE_URL="sqlite:///./polyglot.db", SECRET_KEY="x" * 32)

    assert config.SQLALCHEMY_DATABASE_URI == "sqlite:///./polyglot.db"


def test_postgres_uri_built_from_parts():
    config = Settings(
        _env_file=None,
        DATABASE_URL=None,
        POSTGRES_SERVER="db",
        POSTGRES_DB="translations",
        SECRET_KEY="x" * 32,
    )

    assert config.SQLALCHEMY_DATABASE_URI.startswith("postgresql+psycopg://")
    assert config.SQLALCHEMY_DATABASE_URI.endswith("@db:5432/translations")


def test_only_declared_settings_are_exposed():
    assert not {"HOST", "PORT"} & set(Settings.model_fields)


def test_cors_origins_from_comma_list():
    config = Settings(CORS_ORIGINS="http://a.test, http://b.test/", SECRET_KEY="x" * 32)

    assert config.all_cors_origins == ["http://a.test", "http://b.test"]
