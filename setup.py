"""
Setup script para instalação do serviço de cadastro de médicos.

Este arquivo permite instalar o projeto em modo editable para desenvolvimento:
    pip install -e ".[test]"

Isso adiciona o projeto ao PYTHONPATH e permite imports como:
    from auth.repository import RegistrationRepository
"""

from setuptools import setup, find_namespace_packages

setup(
    name="cadastro-medicos",
    version="1.0.0",
    description="Cadastro de médicos com CRM e endereços de atendimento",
    packages=find_namespace_packages(include=["auth", "database", "middleware", "utils"]),
    py_modules=["config", "main"],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "sqlalchemy>=2.0",
        "pydantic>=2.5",
        "email-validator>=2.0",
        "bcrypt>=4.0",
        "python-dotenv>=1.0",
        "structlog>=24.1",
        "slowapi>=0.1.9",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.25",
            "limits>=3.0",
        ],
    },
)
