# app/main.py
import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager

from app.api.accounts import router as accounts_router
from app.api.stories import router as stories_router
from app.api.envelope import envelope, register_exception_handlers

from app.core.config import settings
from app.core.storage import UPLOADS_URL_PREFIX
from app.db.session import build_engine, build_sessionmaker
from app.db.models import Base

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # === STARTUP ===
    engine = build_engine(settings.db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    app.state.engine = engine
    app.state.sessionmaker = build_sessionmaker(engine)
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    logger.info("store ready at %s", engine.url.render_as_string(hide_password=True))
    yield
    # === SHUTDOWN ===
    await engine.dispose()
    logger.info("store closed")


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Blog Learning Platform API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_exception_handlers(app)

    app.include_router(accounts_router, tags=["accounts"])
    app.include_router(stories_router, tags=["stories"])
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/status")
    def status():
        return envelope("Server is running")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8080)
