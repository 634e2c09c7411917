"""FastAPI application entry point for the review server."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from traduora_sync.config import Settings
from traduora_sync.review import handler as review_handler
from traduora_sync.review.handler import router as review_router
from traduora_sync.sync.applier import Applier
from traduora_sync.traduora.client import TraduoraClient

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()
    configure_logging(settings.log_level)

    client = TraduoraClient(
        settings.traduora_base_url, settings.traduora_user, settings.traduora_password
    )
    applier = Applier(client, settings.traduora_project_id, settings.traduora_locale)

    review_handler.configure(settings, client, applier)

    logger.info("Review server started for project %s", settings.traduora_project_id)
    yield

    await client.close()
    logger.info("Review server stopped")


app = FastAPI(title="Traduora Sync", lifespan=lifespan)
app.include_router(review_router)


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    settings = Settings()
    uvicorn.run(
        "traduora_sync.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
    )
