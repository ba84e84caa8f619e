# migrations/env.py

from __future__ import annotations

import logging
from logging.config import fileConfig

from alembic import context

from workforce_api.wsgi import app as flask_app
from workforce_api.extensions import db
from workforce_api.models import load_all

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)
log = logging.getLogger("alembic.env")

with flask_app.app_context():
    load_all()
    db_uri = flask_app.config["SQLALCHEMY_DATABASE_URI"]

# the Flask config (already normalised by init_db) is the only URL source
config.set_main_option("sqlalchemy.url", db_uri.replace("%", "%%"))

target_metadata = db.metadata

# SQLite cannot ALTER constraints in place
render_as_batch = db_uri.startswith("sqlite")


def _skip_empty_revision(_context, _revision, directives):
    if getattr(config.cmd_opts, "autogenerate", False):
        script = directives[0]
        if script.upgrade_ops.is_empty():
            directives[:] = []
            log.info("no schema changes detected")


def _configure(**kw):
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=render_as_batch,
        process_revision_directives=_skip_empty_revision,
        **kw,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout without a live connection."""
    _configure(url=config.get_main_option("sqlalchemy.url"), literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # reuse the app's engine so pool options from init_db apply
    with flask_app.app_context():
        with db.engine.connect() as connection:
            _configure(connection=connection)
            with context.begin_transaction():
                context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
