# auth/repository.py
"""
Persistência do cadastro: médico + endereços numa única transação
"""

from typing import Any, Dict, Union

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from auth.exceptions import RegistrationPersistenceError
from auth.models import Address, User
from auth.security import get_password_hash
from auth.validation import (
    ValidationErrors, crm_exists, email_exists, validate_registration
)
from utils.logging_config import get_logger
from utils.timezone import now_utc

logger = get_logger(__name__)


class RegistrationRepository:
    def __init__(self, db: Session):
        self.db = db

    def email_exists(self, email: str) -> bool:
        return email_exists(self.db, email)

    def crm_exists(self, crm: str, crm_uf: str) -> bool:
        return crm_exists(self.db, crm, crm_uf)

    def count_users(self) -> int:
        return self.db.execute(select(func.count(User.id))).scalar_one()

    def create_user_with_addresses(
        self, payload: Dict[str, Any]
    ) -> Union[User, ValidationErrors]:
        """
        Valida o payload e, se tudo estiver correto, grava o médico e seus
        endereços num único commit.

        Returns:
            User persistido, ou ValidationErrors (nada é gravado nesse caso)

        Raises:
            RegistrationPersistenceError: falha do banco; a transação é desfeita
        """
        result = validate_registration(payload, self.db)
        if not result.ok:
            logger.info("Cadastro rejeitado", campos=sorted(result.errors))
            return ValidationErrors(result.errors)

        data = result.data
        user = User(
            name=data.name,
            email=data.email,
            phone_number=data.phone_number,
            crm=data.crm,
            crm_uf=data.crm_uf,
            password=get_password_hash(data.password),
            terms_accepted=True,
            terms_accepted_at=now_utc(),
            addresses=[
                Address(
                    location_name=address.location_name,
                    full_address=address.full_address,
                    complement=address.complement,
                    cep=address.cep,
                )
                for address in data.addresses
            ],
        )

        try:
            self.db.add(user)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.exception("Falha ao gravar cadastro", email=data.email, crm=data.crm)
            raise RegistrationPersistenceError() from exc

        self.db.refresh(user)
        logger.info(
            "Cadastro concluído",
            user_id=user.id,
            enderecos=len(user.addresses),
        )
        return user
