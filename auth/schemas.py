# auth/schemas.py
"""
Schemas Pydantic para o cadastro de médicos
"""

from datetime import datetime
from typing import Annotated, Dict, List, Optional

from pydantic import (
    BaseModel, ConfigDict, EmailStr, Field, StrictBool, StringConstraints,
    field_serializer, field_validator,
)
from pydantic_core import PydanticCustomError

from utils.timezone import ensure_utc
from utils.validators import (
    only_digits, normalize_email, validate_cep, validate_crm, validate_telefone, validate_uf
)

# Texto obrigatório, sem espaços nas pontas (senha NÃO usa este tipo)
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
RequiredStr255 = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]
OptionalStr255 = Annotated[str, StringConstraints(strip_whitespace=True, max_length=255)]


# ==========================================
# Schemas de entrada
# ==========================================

class AddressCreate(BaseModel):
    """Endereço de atendimento enviado no cadastro"""
    location_name: RequiredStr255
    full_address: RequiredStr
    complement: Optional[OptionalStr255] = None
    cep: RequiredStr

    @field_validator("cep")
    @classmethod
    def cep_formato(cls, v: str) -> str:
        if not validate_cep(v):
            raise PydanticCustomError(
                "cep_format", "O CEP deve estar no formato 00000-000."
            )
        return only_digits(v)

    @field_validator("complement")
    @classmethod
    def complement_vazio(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class RegisterRequest(BaseModel):
    """Request de cadastro (POST /register)"""
    name: RequiredStr255
    email: EmailStr
    phone_number: RequiredStr
    crm: RequiredStr
    crm_uf: RequiredStr
    password: str = Field(..., min_length=1)
    password_confirmation: Optional[str] = None
    addresses: List[AddressCreate] = Field(..., min_length=1)
    terms_accepted: StrictBool

    @field_validator("email", mode="before")
    @classmethod
    def email_sem_espacos(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def email_normalizado(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("phone_number")
    @classmethod
    def telefone_formato(cls, v: str) -> str:
        if not validate_telefone(v):
            raise PydanticCustomError(
                "phone_format",
                "O telefone deve estar em um formato válido, ex.: (96) 98765-4321.",
            )
        return only_digits(v)

    @field_validator("crm")
    @classmethod
    def crm_formato(cls, v: str) -> str:
        if not validate_crm(v):
            raise PydanticCustomError(
                "crm_format", "O CRM deve conter exatamente 6 dígitos numéricos."
            )
        return v

    @field_validator("crm_uf")
    @classmethod
    def crm_uf_valida(cls, v: str) -> str:
        if not validate_uf(v):
            raise PydanticCustomError(
                "crm_uf_invalid", "A UF do CRM deve ser a sigla de um estado brasileiro."
            )
        return v.upper()

    @field_validator("password")
    @classmethod
    def senha_limite_bcrypt(cls, v: str) -> str:
        # bcrypt só considera os primeiros 72 bytes
        if len(v.encode("utf-8")) > 72:
            raise PydanticCustomError(
                "password_too_long", "A senha não pode ter mais de 72 bytes."
            )
        return v

    @field_validator("terms_accepted")
    @classmethod
    def termos_aceitos(cls, v: bool) -> bool:
        if v is not True:
            raise PydanticCustomError(
                "terms_not_accepted", "Os termos de uso devem ser aceitos."
            )
        return v


# ==========================================
# Schemas de resposta
# ==========================================

class AddressResponse(BaseModel):
    """Endereço persistido"""
    id: int
    user_id: int
    location_name: str
    full_address: str
    complement: Optional[str] = None
    cep: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Médico cadastrado (nunca inclui a senha)"""
    id: int
    name: str
    email: str
    phone_number: str
    crm: str
    crm_uf: str
    terms_accepted: bool
    terms_accepted_at: Optional[datetime] = None
    addresses: List[AddressResponse] = []

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("terms_accepted_at")
    def serialize_terms_accepted_at(self, value: Optional[datetime]):
        value = ensure_utc(value)
        return value.isoformat() if value else None


class ValidationErrorResponse(BaseModel):
    """Corpo da resposta 422"""
    message: str
    errors: Dict[str, List[str]]
