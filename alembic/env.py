# alembic/env.py
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine

# DATABASE_URL .env'den okunur; engine ve metadata uygulamayla ortak
from gearguard.core.db import Base, engine as app_engine
from gearguard import models  # noqa: F401  (tabloları metadata'ya kaydeder)

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

# `alembic -x url=sqlite:///other.db upgrade head` ile farklı DB hedeflenebilir
_override_url = context.get_x_argument(as_dictionary=True).get("url")


def _engine():
    return create_engine(_override_url) if _override_url else app_engine


def _options(dialect_name: str) -> dict:
    # SQLite ALTER kısıtlı -> batch modu
    return dict(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=False,
        render_as_batch=(dialect_name == "sqlite"),
    )


def run_migrations_offline():
    eng = _engine()
    context.configure(url=str(eng.url), literal_binds=True, **_options(eng.dialect.name))
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    eng = _engine()
    with eng.connect() as connection:
        context.configure(connection=connection, **_options(eng.dialect.name))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
