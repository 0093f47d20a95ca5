# oddsdash/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .core.config import get_settings
from .core.logging import configure_logging
from .deps import close_game_store
from .routers import games, health

configure_logging(get_settings().log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_game_store()


app = FastAPI(title="Odds Dashboard API", version="0.1.0", lifespan=lifespan)

# Routers
app.include_router(health.router)
app.include_router(games.router)


@app.exception_handler(Exception)
async def unhandled_error(request: Request, exc: Exception):
    logger.exception("unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content={"ok": False, "error": str(exc)})
