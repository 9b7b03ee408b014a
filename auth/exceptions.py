# auth/exceptions.py
"""
Exceções do cadastro
"""


class RegistrationPersistenceError(Exception):
    """Falha ao gravar médico/endereços (banco indisponível, constraint violada etc.)"""

    def __init__(self, message: str = "Não foi possível concluir o cadastro."):
        super().__init__(message)
        self.message = message
