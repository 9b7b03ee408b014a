# config.py
# -*- coding: utf-8 -*-
"""
Configurações centralizadas do serviço de cadastro de médicos
"""

import os
from dotenv import load_dotenv

# Carrega variáveis de ambiente (apenas se existir .env)
load_dotenv()

# ==================================================
# AMBIENTE
# ==================================================
ENV = os.getenv("ENV", "development")
IS_PRODUCTION = ENV == "production"

# ==================================================
# CONFIGURAÇÕES DO BANCO DE DADOS
# ==================================================
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cadastro.db")

# Heroku/Railway usam postgres:// mas SQLAlchemy precisa de postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# ==================================================
# SEGURANÇA
# ==================================================
# Custo do bcrypt (nos testes usa-se 4 para acelerar)
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Arquivo opcional para eventos de auditoria (além do stdout)
AUDIT_LOG_FILE = os.getenv("AUDIT_LOG_FILE") or None

# ==================================================
# HTTP
# ==================================================
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

SERVICE_NAME = "cadastro-medicos"
