import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from .config import SandboxConfig, Settings
from .explorer import Explorer
from .logging_config import setup_logging
from .middlewares import RequestLogMiddleware
from .routers import files, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	# Startup
	config = app.state.explorer.config
	if config.has_root:
		logger.info("Serving files from %s", config.root)
	else:
		logger.warning("No root directory configured; requests without an explicit path will be rejected")
	yield
	# Shutdown
	logger.info("Shutting down")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
	settings = settings or Settings()
	app = FastAPI(title="Root Explorer API", version="0.1.0", lifespan=lifespan)
	# Root is resolved once here and never reassigned
	app.state.explorer = Explorer(SandboxConfig.from_settings(settings))

	# CORS (adjust in .env if exposing publicly)
	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_allow_origins,
		allow_credentials=True,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	app.add_middleware(RequestLogMiddleware)
	app.add_middleware(GZipMiddleware, minimum_size=1000)

	app.include_router(health.router, prefix="/api")
	app.include_router(files.router, prefix="/api")

	return app


def run():
	import uvicorn

	settings = Settings()
	setup_logging(settings)
	uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
	run()
