"""
FastAPI Main Application for the Scriptorium API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.app_context import AppContext, set_app_context
from api.error_handling import register_exception_handlers
from api.routers import blog, login, static
from auth.penalty_tracker import PenaltyTracker
from auth.session_store import SessionStore
from auth.utils import parse_period
from config import TableNames, get_config, merge_config
from Database import Database
from infrastructure.connection_executor import ConnectionExecutor
from infrastructure.transaction_sequencer import TransactionSequencer
from services.blog_service import BlogService
from services.login_service import LoginService
from services.static_service import StaticPageService


logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def build_database(config: dict) -> Database:
    db_config = config["database"]
    return Database(
        host=db_config.get("host", "localhost"),
        user=db_config.get("user", ""),
        password=db_config.get("password", ""),
        database_name=db_config.get("name", "scriptorium"),
        port=db_config.get("port", 3306),
        pool_size=db_config.get("pool_size", 10),
        connect_timeout=db_config.get("connect_timeout", 5),
    )


def build_app_context(config: dict, database) -> AppContext:
    """Wire the stores and services owned by one application instance."""
    auth_config = config["auth"]
    tables = TableNames.from_config(config)

    session_store = SessionStore(max_period=parse_period(str(auth_config["max_session_period"])))
    penalty_tracker = PenaltyTracker(failures_before_penalty=int(auth_config["failures_before_penalty"]))
    sequencer = TransactionSequencer(database)
    executor = ConnectionExecutor(database)

    return AppContext(
        config=config,
        database=database,
        session_store=session_store,
        penalty_tracker=penalty_tracker,
        login_service=LoginService(session_store, penalty_tracker, executor, tables),
        blog_service=BlogService(sequencer, executor, tables),
        static_service=StaticPageService(sequencer, executor, tables),
    )


def create_app(config: dict | None = None, database=None) -> FastAPI:
    """
    Create the application.

    Args:
        config: Configuration overrides on top of the defaults; read from the
            config file when omitted
        database: Data store to use instead of a MySQL pool built from config
    """
    config = merge_config(config) if config is not None else get_config()
    if database is None:
        database = build_database(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if not database.is_connected() and not database.connect():
            raise RuntimeError("Failed to connect to database")
        logger.info("Database connected successfully")
        try:
            yield
        finally:
            database.close()

    app = FastAPI(
        title=config["api"]["title"],
        description="REST API for blog posts, static pages and login",
        version=VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config["api"].get("cors_origins", ["*"]),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    context = build_app_context(config, database)
    set_app_context(app, context)
    register_exception_handlers(app)

    app.include_router(login.router)
    app.include_router(blog.router)
    app.include_router(static.router)

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy" if database.is_connected() else "degraded",
            "service": config["api"]["title"],
            "version": VERSION,
            "sessions": context.session_store.get_session_count(),
            "penalised_origins": context.penalty_tracker.get_penalised_count(),
        }

    return app
