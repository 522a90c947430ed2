import os
import logging
from dotenv import load_dotenv
load_dotenv()
from flask import Flask
from flask_migrate import Migrate
from sqlalchemy import event, inspect
from config import config_dict, ProdConfig
from models import db
from classes.badge_catalog import load_default_catalog
from manage import badges_cli
from utils.badge_service import sync_badge_catalog

logger = logging.getLogger(__name__)

migrate = Migrate()


def _enable_sqlite_savepoints(engine):
    # pysqlite's implicit BEGIN breaks SAVEPOINT; take over transaction control.
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_app(config_name=None, config_overrides=None):
    app = Flask(__name__)

    env = config_name or os.environ.get("FLASK_ENV", "production")
    app.config.from_object(config_dict.get(env, ProdConfig))
    if config_overrides:
        app.config.update(config_overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Environment: %s", env)

    db.init_app(app)
    migrate.init_app(app, db)

    app.extensions["badge_catalog"] = load_default_catalog()
    app.cli.add_command(badges_cli)

    with app.app_context():
        if db.engine.dialect.name == "sqlite":
            _enable_sqlite_savepoints(db.engine)
        if app.config["BADGE_CATALOG_AUTO_SYNC"] and inspect(db.engine).has_table("badges"):
            sync_badge_catalog()

    return app
