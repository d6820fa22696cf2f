# qa_service/main.py

"""
Entry point for the Q&A HTTP API.

    uvicorn qa_service.main:app --host 0.0.0.0 --port 8000
"""

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .auth import auth_router
from .config import Settings, get_settings
from .database import create_engine_from_settings, create_sessionmaker, init_db
from .errors import install_error_handlers
from .logging_config import configure_logging, get_logger
from .routers import answers, categories, items, questions, users


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    app = FastAPI(title=settings.title, version=__version__, debug=settings.debug)
    app.state.settings = settings
    app.state.engine = create_engine_from_settings(settings)
    app.state.sessionmaker = create_sessionmaker(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_origins != ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    @app.on_event("startup")
    async def startup():
        await init_db(app.state.engine)
        logger.info("Q&A service %s started (api prefix %r)", __version__, settings.api_prefix)

    @app.on_event("shutdown")
    async def shutdown():
        await app.state.engine.dispose()
        logger.info("Q&A service stopped")

    @app.get("/health", tags=["system"])
    async def health():
        return {"status": "ok", "version": __version__}

    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(questions.router, prefix=settings.api_prefix)
    app.include_router(answers.router, prefix=settings.api_prefix)
    app.include_router(categories.router, prefix=settings.api_prefix)
    app.include_router(users.router, prefix=settings.api_prefix)
    app.include_router(items.router, prefix=settings.api_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("qa_service.main:app", host=settings.host, port=settings.port)
