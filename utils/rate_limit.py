# utils/rate_limit.py
# -*- coding: utf-8 -*-
"""
Rate Limiting do serviço de cadastro

SECURITY: Protege o cadastro contra abuso (criação em massa, enumeração de e-mails).

Limites padrão:
- Cadastro: 10 requisições/minuto por IP

Uso:
    from utils.rate_limit import limiter, rate_limit_exceeded_handler, LIMITS

    # No main.py
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # Nos routers
    @router.post("/register")
    @limiter.limit(LIMITS["register"])
    async def register(request: Request):
        ...
"""

import os
from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request
from fastapi.responses import JSONResponse

from utils.audit import AuditEvent, log_audit_event
from utils.logging_config import get_logger

logger = get_logger(__name__)

# ==================================================
# CONFIGURAÇÃO
# ==================================================

RETRY_AFTER_SECONDS = "60"


# SECURITY: Detecta IP real atrás de proxy/load balancer
def get_real_ip(request: Request) -> str:
    """
    Obtém IP real do cliente, considerando headers de proxy.

    Prioridade:
    1. X-Forwarded-For (primeiro IP da lista)
    2. X-Real-IP
    3. IP direto da conexão
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip

    return get_remote_address(request)


# ==================================================
# LIMITER INSTANCE
# ==================================================

RATE_LIMIT_ENABLED = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
RATE_LIMIT_REGISTER = os.getenv("RATE_LIMIT_REGISTER", "10/minute")

# Storage: memória por padrão, Redis em produção (ex: redis://host:6379)
RATE_LIMIT_STORAGE = os.getenv("RATE_LIMIT_STORAGE", "memory://")

limiter = Limiter(
    key_func=get_real_ip,
    enabled=RATE_LIMIT_ENABLED,
    storage_uri=RATE_LIMIT_STORAGE,
)

LIMITS = {
    "register": RATE_LIMIT_REGISTER,
}


# ==================================================
# HANDLERS
# ==================================================

async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handler customizado para rate limit excedido.

    Retorna resposta JSON amigável em português.
    """
    exc_detail = getattr(exc, 'detail', str(exc))

    logger.warning(
        "Rate limit excedido",
        ip=get_real_ip(request),
        path=request.url.path,
        detail=exc_detail,
    )
    log_audit_event(
        AuditEvent.RATE_LIMIT_EXCEEDED,
        request=request,
        details={"limit": str(exc_detail)},
        success=False,
        severity="WARNING",
    )

    return JSONResponse(
        status_code=429,
        content={
            "detail": "Limite de requisições excedido. Tente novamente em alguns minutos.",
            "error": "rate_limit_exceeded",
            "retry_after": RETRY_AFTER_SECONDS
        },
        headers={
            "Retry-After": RETRY_AFTER_SECONDS,
            "X-RateLimit-Limit": str(exc_detail),
        }
    )
