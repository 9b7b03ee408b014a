# utils/audit.py
"""
SECURITY: Audit logging dos eventos de cadastro.

Eventos registrados:
- USER_REGISTERED: Cadastro concluído
- REGISTRATION_REJECTED: Cadastro recusado por validação
- REGISTRATION_FAILED: Erro de banco ao gravar o cadastro
- RATE_LIMIT_EXCEEDED: Limite de requisições estourado
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional

from fastapi import Request

from config import AUDIT_LOG_FILE
from middleware.request_id import get_request_id
from utils.logging_config import get_logger

AUDIT_LOGGER_NAME = "security.audit"

audit_logger = get_logger(AUDIT_LOGGER_NAME)

# Arquivo de auditoria opcional (em produção, preferir o coletor central)
if AUDIT_LOG_FILE:
    _audit_handler = logging.FileHandler(AUDIT_LOG_FILE, encoding="utf-8")
    _audit_handler.setLevel(logging.INFO)
    _audit_handler.setFormatter(logging.Formatter(
        '%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logging.getLogger(AUDIT_LOGGER_NAME).addHandler(_audit_handler)


class AuditEvent(str, Enum):
    """Tipos de eventos de auditoria"""
    USER_REGISTERED = "USER_REGISTERED"
    REGISTRATION_REJECTED = "REGISTRATION_REJECTED"
    REGISTRATION_FAILED = "REGISTRATION_FAILED"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


SENSITIVE_KEYS = {
    "password", "senha", "secret", "token", "api_key", "apikey",
    "authorization", "credential",
}


def get_client_ip(request: Optional[Request]) -> str:
    """
    SECURITY: Extrai IP real do cliente considerando proxies.
    """
    if not request:
        return "unknown"

    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # Pode ter múltiplos IPs, o primeiro é o cliente original
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    if request.client:
        return request.client.host

    return "unknown"


def mask_sensitive_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    SECURITY: Remove ou mascara dados sensíveis antes de logar.
    """
    masked = {}
    for key, value in data.items():
        key_lower = str(key).lower()

        if any(s in key_lower for s in SENSITIVE_KEYS):
            masked[key] = "***MASKED***"
        elif isinstance(value, dict):
            masked[key] = mask_sensitive_data(value)
        elif isinstance(value, str) and len(value) > 100:
            masked[key] = value[:100] + "...[truncated]"
        else:
            masked[key] = value

    return masked


def log_audit_event(
    event: AuditEvent,
    user_id: Optional[int] = None,
    email: Optional[str] = None,
    request: Optional[Request] = None,
    details: Optional[Dict[str, Any]] = None,
    success: bool = True,
    severity: str = "INFO"
) -> Dict[str, Any]:
    """
    SECURITY: Registra evento de auditoria.

    Args:
        event: Tipo do evento (AuditEvent enum)
        user_id: ID do médico (se já existir)
        email: E-mail informado no cadastro
        request: Request do FastAPI (para extrair IP, user-agent, etc.)
        details: Detalhes adicionais do evento (dados sensíveis são mascarados)
        success: Se a ação foi bem sucedida
        severity: INFO, WARNING, ERROR ou CRITICAL

    Returns:
        O registro gravado (útil em testes)
    """
    request_id = get_request_id()
    if not request_id and request is not None:
        request_id = getattr(request.state, "request_id", None)

    audit_record = {
        "audit_event": event.value,
        "success": success,
        "user_id": user_id,
        "email": email,
        "ip_address": get_client_ip(request),
        "user_agent": request.headers.get("User-Agent", "unknown") if request else "unknown",
        "path": str(request.url.path) if request else "unknown",
        "method": request.method if request else "unknown",
        "request_id": request_id,
    }

    if details:
        audit_record["details"] = mask_sensitive_data(details)

    log = getattr(audit_logger, severity.lower(), audit_logger.info)
    log("audit", **audit_record)
    return audit_record


# ============================================
# Funções de conveniência
# ============================================

def log_user_registered(user_id: int, email: str, request: Request):
    """Registra cadastro concluído"""
    return log_audit_event(
        AuditEvent.USER_REGISTERED,
        user_id=user_id,
        email=email,
        request=request,
    )


def log_registration_rejected(email: Optional[str], request: Request, fields):
    """Registra cadastro recusado por validação"""
    return log_audit_event(
        AuditEvent.REGISTRATION_REJECTED,
        email=email if isinstance(email, str) else None,
        request=request,
        details={"fields": sorted(fields)},
        success=False,
        severity="WARNING",
    )


def log_registration_failed(email: Optional[str], request: Request, reason: str):
    """Registra erro de persistência"""
    return log_audit_event(
        AuditEvent.REGISTRATION_FAILED,
        email=email if isinstance(email, str) else None,
        request=request,
        details={"reason": reason},
        success=False,
        severity="ERROR",
    )
