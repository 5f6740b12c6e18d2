from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import ensure_root, load_root, settings
from .logging_config import configure_logging
from .routers import tools
from .services.dispatcher import Dispatcher

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    root = ensure_root(load_root(settings))
    app.state.root = root
    app.state.dispatcher = Dispatcher(root)
    logger.info('File gateway serving %s', root)
    try:
        yield
    finally:
        app.state.dispatcher = None
        logger.info('File gateway stopped')


app = FastAPI(title=settings.app_name, lifespan=lifespan)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    return JSONResponse({'detail': 'Internal server error. Please try again.'}, status_code=500)


@app.get('/healthz')
def healthz(request: Request):
    return {'ok': getattr(request.app.state, 'dispatcher', None) is not None}


app.include_router(tools.router)


def run():
    configure_logging(settings.log_level)
    level_name = logging.getLevelName(logging.getLogger().getEffectiveLevel()).lower()
    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_level=level_name)
