# main.py
"""
Cadastro de Médicos - Aplicação FastAPI Principal

Expõe o cadastro de médicos (dados profissionais, telefone, CRM e
endereços de atendimento) via POST /register.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from auth.exceptions import RegistrationPersistenceError
from auth.router import router as auth_router
from config import CORS_ORIGINS, SERVICE_NAME
from database.init_db import init_database
from middleware.request_id import RequestIDMiddleware, get_request_id
from utils.logging_config import get_logger, setup_logging
from utils.rate_limit import limiter, rate_limit_exceeded_handler

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle events da aplicação.
    Executa na inicialização e no shutdown.
    """
    setup_logging()
    logger.info("Iniciando serviço de cadastro")
    init_database()
    yield
    logger.info("Encerrando serviço de cadastro")


app = FastAPI(
    title="Cadastro de Médicos",
    description="Cadastro de médicos com CRM e endereços de atendimento",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

# SECURITY: Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(RegistrationPersistenceError)
async def registration_persistence_error_handler(request: Request, exc: RegistrationPersistenceError):
    """Falha de banco no cadastro: nada foi gravado (rollback já executado)"""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "message": exc.message,
            "request_id": get_request_id() or getattr(request.state, "request_id", None),
        },
    )


# ==================================================
# ROTAS
# ==================================================

@app.get("/health")
async def health_check():
    """Health check para monitoramento"""
    return {"status": "ok", "service": SERVICE_NAME}


app.include_router(auth_router)


# ==================================================
# EXECUÇÃO DIRETA
# ==================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
