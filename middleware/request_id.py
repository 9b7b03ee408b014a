# middleware/request_id.py
"""
Middleware que atribui um Request ID a cada requisição.

- Reaproveita o X-Request-ID recebido (tracing entre serviços) ou gera um UUID
- Guarda em request.state.request_id e num ContextVar
- Devolve o mesmo valor no header X-Request-ID da resposta

Uso em outros módulos:
    from middleware.request_id import get_request_id

    request_id = get_request_id()  # None fora de uma requisição
"""

import uuid
import logging
from contextvars import ContextVar
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

# Tamanho máximo aceito para um Request ID vindo de fora
MAX_REQUEST_ID_LENGTH = 64

_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

logger = logging.getLogger(__name__)


def get_request_id() -> Optional[str]:
    """Request ID da requisição atual (None fora do contexto de uma requisição)."""
    return _request_id_ctx.get()


def set_request_id(request_id: Optional[str]) -> None:
    """Uso interno pelo middleware."""
    _request_id_ctx.set(request_id)


def generate_request_id() -> str:
    """UUID v4, ex: "550e8400-e29b-41d4-a716-446655440000"."""
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Uso:
        app.add_middleware(RequestIDMiddleware)
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        existing_request_id = request.headers.get(REQUEST_ID_HEADER)
        if existing_request_id:
            request_id = existing_request_id[:MAX_REQUEST_ID_LENGTH]
        else:
            request_id = generate_request_id()

        request.state.request_id = request_id
        set_request_id(request_id)

        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        except Exception as e:
            # Deixa a exceção propagar para os handlers de erro
            logger.error(f"[{request_id}] Erro durante requisição: {e}")
            raise
        finally:
            set_request_id(None)
