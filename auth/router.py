# auth/router.py
"""
Endpoint de cadastro de médicos: POST /register
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from database.connection import get_db
from auth.exceptions import RegistrationPersistenceError
from auth.repository import RegistrationRepository
from auth.schemas import UserResponse, ValidationErrorResponse
from auth.validation import ValidationErrors

# SECURITY: Rate Limiting
from utils.rate_limit import limiter, LIMITS

# SECURITY: Audit Logging
from utils.audit import (
    log_user_registered, log_registration_rejected, log_registration_failed
)

router = APIRouter(tags=["Cadastro"])


async def _read_payload(request: Request) -> dict:
    """
    Lê o corpo JSON. Corpo vazio, malformado ou que não seja objeto
    vira payload vazio, e o cliente recebe a lista de campos obrigatórios.
    """
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post(
    "/register",
    name="register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ValidationErrorResponse},
        status.HTTP_429_TOO_MANY_REQUESTS: {"description": "Limite de requisições excedido"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Falha ao gravar o cadastro"},
    },
)
@limiter.limit(LIMITS["register"])
async def register(
    request: Request,  # Necessário para rate limiting
    db: Session = Depends(get_db)
):
    """
    Cadastra um médico e seus endereços de atendimento.

    - **name**, **email**, **phone_number**, **crm**, **crm_uf**
    - **password** + **password_confirmation**
    - **addresses**: lista com ao menos um endereço (location_name, full_address, complement, cep)
    - **terms_accepted**: deve ser `true`

    Qualquer erro de validação devolve 422 com todos os campos inválidos
    e nada é gravado.
    """
    payload = await _read_payload(request)
    repo = RegistrationRepository(db)

    try:
        result = repo.create_user_with_addresses(payload)
    except RegistrationPersistenceError as exc:
        log_registration_failed(payload.get("email"), request, type(exc.__cause__).__name__)
        raise

    if isinstance(result, ValidationErrors):
        log_registration_rejected(payload.get("email"), request, result.errors.keys())
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=result.to_dict(),
        )

    log_user_registered(result.id, result.email, request)
    return result
