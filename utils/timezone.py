# utils/timezone.py
"""
POLÍTICA DE TIMEZONE DO SERVIÇO

REGRAS:
1. GRAVAÇÃO NO BANCO: Sempre UTC (timezone-aware)
2. SERIALIZAÇÃO JSON: ISO 8601 com timezone explícito

USO:
    from utils.timezone import now_utc, ensure_utc

    # Para gravar no banco (UTC)
    terms_accepted_at = now_utc()

IMPORTANTE:
- Nunca use datetime.utcnow() ou datetime.now() diretamente
- SQLite devolve datetimes naive; ensure_utc() os trata como UTC
"""

from datetime import datetime, timezone
from typing import Optional

UTC = timezone.utc


def now_utc() -> datetime:
    """
    Retorna o datetime atual em UTC com timezone-aware.

    USE ESTA FUNÇÃO para gravar timestamps no banco de dados.

    Example:
        >>> from utils.timezone import now_utc
        >>> accepted_at = now_utc()
        >>> print(accepted_at)
        2026-10-19 18:30:00+00:00
    """
    return datetime.now(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Garante um datetime timezone-aware em UTC.

    - Se naive: assume que já está em UTC (caso do SQLite)
    - Se aware: converte para UTC
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def get_utc_now():
    """
    Função callable para uso em Column(default=...).

    USE EM MODELS:
        from utils.timezone import get_utc_now
        created_at = Column(DateTime(timezone=True), default=get_utc_now)
    """
    return now_utc()
