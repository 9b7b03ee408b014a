# auth/validation.py
"""
Validação completa do cadastro de médicos.

Todas as regras são avaliadas de uma vez e os erros são devolvidos
agrupados por campo, no formato usado pelo frontend:

    {
        "email": ["O e-mail informado já está cadastrado."],
        "addresses.0.cep": ["O CEP deve estar no formato 00000-000."]
    }

USO:
    result = validate_registration(payload, db)
    if not result.ok:
        return result.errors
    dados = result.data  # RegisterRequest já normalizado
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.orm import Session

from auth.models import User
from auth.schemas import RegisterRequest
from utils.validators import normalize_email

# Nome amigável de cada campo nas mensagens
FIELD_LABELS = {
    "name": "nome",
    "email": "e-mail",
    "phone_number": "telefone",
    "crm": "CRM",
    "crm_uf": "UF do CRM",
    "password": "senha",
    "password_confirmation": "confirmação da senha",
    "addresses": "endereços",
    "terms_accepted": "aceite dos termos",
    "location_name": "nome do local",
    "full_address": "endereço completo",
    "complement": "complemento",
    "cep": "CEP",
}

# Mensagens para os erros nativos do pydantic
ERROR_MESSAGES = {
    "missing": "O campo {label} é obrigatório.",
    "string_too_short": "O campo {label} é obrigatório.",
    "string_too_long": "O campo {label} não pode ter mais de {max_length} caracteres.",
    "string_type": "O campo {label} deve ser um texto.",
    "list_type": "O campo {label} deve ser uma lista.",
    "too_short": "O campo {label} deve conter ao menos um item.",
    "model_type": "O campo {label} deve ser um objeto.",
    "model_attributes_type": "O campo {label} deve ser um objeto.",
    "dict_type": "O campo {label} deve ser um objeto.",
    "bool_type": "O campo {label} deve ser verdadeiro ou falso.",
    "value_error": "O campo {label} deve ser um endereço de e-mail válido.",
}

MSG_PASSWORD_CONFIRMATION = "A confirmação da senha não confere."
MSG_EMAIL_TAKEN = "O e-mail informado já está cadastrado."
MSG_CRM_TAKEN = "Já existe um médico cadastrado com este CRM nesta UF."
MSG_INVALID_DATA = "Os dados informados são inválidos."


@dataclass
class ValidationErrors:
    """Falha de validação: mapa campo -> mensagens"""
    errors: Dict[str, List[str]]
    message: str = MSG_INVALID_DATA

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


@dataclass
class ValidationResult:
    data: Optional[RegisterRequest] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def add(self, path: str, message: str) -> None:
        messages = self.errors.setdefault(path, [])
        if message not in messages:
            messages.append(message)


def _field_path(loc) -> str:
    """('addresses', 0, 'cep') -> 'addresses.0.cep'"""
    return ".".join(str(part) for part in loc)


def _label(loc) -> str:
    for part in reversed(loc):
        if isinstance(part, str):
            return FIELD_LABELS.get(part, part)
    return FIELD_LABELS["addresses"]


def _translate(error: Dict[str, Any]) -> str:
    error_type = error["type"]
    label = _label(error["loc"])

    # null ou texto vazio contam como campo ausente
    raw = error.get("input")
    if error_type.endswith("_type") or error_type == "value_error":
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            error_type = "missing"

    template = ERROR_MESSAGES.get(error_type)
    if template is None:
        # Erros customizados (PydanticCustomError) já trazem a mensagem final
        return error["msg"]
    return template.format(label=label, **(error.get("ctx") or {}))


def format_pydantic_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Converte um ValidationError do pydantic em {campo: [mensagens]}"""
    errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        path = _field_path(error["loc"]) or "payload"
        message = _translate(error)
        messages = errors.setdefault(path, [])
        if message not in messages:
            messages.append(message)
    return errors


def email_exists(db: Session, email: str) -> bool:
    stmt = select(User.id).where(User.email == normalize_email(email)).limit(1)
    return db.execute(stmt).first() is not None


def crm_exists(db: Session, crm: str, crm_uf: str) -> bool:
    stmt = (
        select(User.id)
        .where(User.crm == crm.strip(), User.crm_uf == crm_uf.strip().upper())
        .limit(1)
    )
    return db.execute(stmt).first() is not None


def validate_registration(payload: Dict[str, Any], db: Session) -> ValidationResult:
    """
    Valida o payload de cadastro.

    Ordem:
    1. Formato/obrigatoriedade de todos os campos (pydantic)
    2. Confirmação de senha
    3. Unicidade de e-mail e de (crm, crm_uf) no banco

    Uma regra nunca interrompe as outras: o resultado traz todos os erros.
    A unicidade só é consultada para valores que passaram no formato.
    """
    result = ValidationResult()

    # Clientes PHP serializam objeto vazio como []: [[]] equivale a [{}]
    addresses = payload.get("addresses")
    if isinstance(addresses, list):
        payload = {
            **payload,
            "addresses": [{} if item == [] else item for item in addresses],
        }

    try:
        result.data = RegisterRequest.model_validate(payload)
    except ValidationError as exc:
        for path, messages in format_pydantic_errors(exc).items():
            for message in messages:
                result.add(path, message)

    password = payload.get("password")
    if "password" not in result.errors and password != payload.get("password_confirmation"):
        result.add("password", MSG_PASSWORD_CONFIRMATION)

    email = payload.get("email")
    if "email" not in result.errors and isinstance(email, str) and email_exists(db, email):
        result.add("email", MSG_EMAIL_TAKEN)

    crm, crm_uf = payload.get("crm"), payload.get("crm_uf")
    if (
        "crm" not in result.errors
        and "crm_uf" not in result.errors
        and isinstance(crm, str)
        and isinstance(crm_uf, str)
        and crm_exists(db, crm, crm_uf)
    ):
        result.add("crm", MSG_CRM_TAKEN)

    if not result.ok:
        result.data = None
    return result
