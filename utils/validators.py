# utils/validators.py
"""
Validadores centralizados para o cadastro de médicos.

Fornece funções de validação reutilizáveis para:
- Telefone
- CEP
- CRM / UF
- Email

USO:
    from utils.validators import validate_cep, only_digits

    if not validate_cep(cep):
        raise ValueError("CEP inválido")
    cep = only_digits(cep)
"""

import re


# Unidades federativas aceitas para o CRM
UFS_BRASIL = frozenset({
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA", "MT", "MS", "MG", "PA",
    "PB", "PR", "PE", "PI", "RJ", "RN", "RS", "RO", "RR", "SC", "SP", "SE", "TO",
})

# Apenas dígitos ASCII (0-9)
# (DD) opcional + número local de 8 ou 9 dígitos, separadores opcionais
_TELEFONE_RE = re.compile(r'^(?:\(\d{2}\)|\d{2})?[\s.-]?\d{4,5}[\s.-]?\d{4}$', re.ASCII)
_CEP_RE = re.compile(r'^\d{5}-\d{3}$', re.ASCII)
_CRM_RE = re.compile(r'^\d{6}$', re.ASCII)


def only_digits(value) -> str:
    """Remove tudo que não for dígito: '(96) 98765-4321' -> '96987654321'"""
    return re.sub(r'[^0-9]', '', str(value))


# ============================================
# TELEFONE
# ============================================

def validate_telefone(telefone: str) -> bool:
    """
    Valida número de telefone brasileiro.

    Aceita formatos:
    - (96) 98765-4321
    - 96987654321
    - 98765-4321
    - 3333-4444

    Args:
        telefone: Número de telefone

    Returns:
        True se formato válido
    """
    if not isinstance(telefone, str):
        return False
    return bool(_TELEFONE_RE.match(telefone.strip()))


# ============================================
# CEP
# ============================================

def validate_cep(cep: str) -> bool:
    """Valida CEP no formato NNNNN-NNN"""
    if not isinstance(cep, str):
        return False
    return bool(_CEP_RE.match(cep.strip()))


# ============================================
# CRM
# ============================================

def validate_crm(crm: str) -> bool:
    """CRM: exatamente 6 dígitos numéricos"""
    if not isinstance(crm, str):
        return False
    return bool(_CRM_RE.match(crm.strip()))


def validate_uf(uf: str) -> bool:
    """UF de emissão do CRM (sigla de estado, case-insensitive)"""
    if not isinstance(uf, str):
        return False
    return uf.strip().upper() in UFS_BRASIL


# ============================================
# EMAIL
# ============================================

def normalize_email(email: str) -> str:
    """
    Normaliza email: lowercase e trim.

    Args:
        email: Endereço de email

    Returns:
        Email normalizado
    """
    if not email:
        return ""
    return email.strip().lower()
