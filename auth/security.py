# auth/security.py
"""
Funções de segurança: hash de senha
"""

import bcrypt

from config import BCRYPT_ROUNDS


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verifica se a senha plain corresponde ao hash"""
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Hash corrompido/formato desconhecido
        return False


def get_password_hash(password: str) -> str:
    """Gera hash da senha (bcrypt com salt aleatório)"""
    return bcrypt.hashpw(
        password.encode('utf-8'),
        bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    ).decode('utf-8')
