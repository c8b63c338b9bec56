import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("root_explorer.requests")


class RequestLogMiddleware(BaseHTTPMiddleware):
	async def dispatch(self, request: Request, call_next):
		started = time.perf_counter()
		response = await call_next(request)
		elapsed_ms = (time.perf_counter() - started) * 1000
		logger.info(
			"%s %s?%s -> %d (%.1f ms)",
			request.method,
			request.url.path,
			request.url.query,
			response.status_code,
			elapsed_ms,
		)
		return response
