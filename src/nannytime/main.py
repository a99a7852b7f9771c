from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.datetime_utils import resolve_timezone
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_demo_user, list_tables
from .payroll.controller import register as register_payroll
from .profiles.controller import register as register_profiles
from .settings import get_settings_module
from .shifts.controller import register as register_shifts
from .state.controller import register as register_state
from .summary.base import NullSummarizer
from .users.controller import register as register_users
from .web.common import register_error_handlers

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def _build_summarizer(settings):
    api_key = getattr(settings, "GOOGLE_API_KEY", "")
    if not api_key:
        logger.info("GOOGLE_API_KEY not set; pay-stub notes use the fallback text")
        return NullSummarizer()

    from .summary.gemini_summarizer import GeminiSummarizer

    return GeminiSummarizer(api_key, model_name=getattr(settings, "SUMMARY_MODEL", "gemini-1.5-flash"))


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_user(db_config)
            logger.info("demo account ready")

        container = build_container(
            db_config=db_config,
            summarizer=_build_summarizer(settings),
            week_start=int(getattr(settings, "WEEK_START", 6)),
            tz=resolve_timezone(getattr(settings, "TIMEZONE", "UTC")),
            session_ttl=timedelta(hours=int(getattr(settings, "SESSION_TTL_HOURS", 12))),
            enforce_single_active=bool(getattr(settings, "ENFORCE_SINGLE_ACTIVE_SHIFT", True)),
            allow_inverted_range=bool(getattr(settings, "ALLOW_INVERTED_SHIFT_RANGE", False)),
        )

    app.extensions["nannytime"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_shifts(app, container)
    register_profiles(app, container)
    register_payroll(app, container)
    register_state(app, container)

    return app
