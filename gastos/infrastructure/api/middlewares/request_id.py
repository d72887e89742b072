# gastos/infrastructure/api/middlewares/request_id.py
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 64

logger = logging.getLogger(__name__)


def resolve_request_id(incoming: str) -> str:
    """Reutiliza el id del cliente si es razonable; si no, genera uno nuevo."""
    incoming = (incoming or "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Identifica cada petición para poder cruzar logs y respuestas de error.
    El id queda en request.state.request_id y vuelve en la cabecera X-Request-Id.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(f"[{request_id}] {request.method} {request.url.path}")

        response = await call_next(request)

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} en {elapsed_ms}ms")
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
