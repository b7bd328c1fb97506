"""
Quiz Progress Server

FastAPI server with:
- Sessões de quiz em andamento via AgentFS (KV)
- Banco de questões e resultados em SQLite (apsw)
- Autenticação opcional por X-API-Key
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app_state
from config import get_config
from quiz_progress.core.exceptions import ProgressError, UnsupportedQuestionType, ValidationError
from quiz_progress.core.logger import get_logger, set_level
from quiz_progress.router import router as progress_router

logger = get_logger("server")

# Campos de request que carregam o tipo da questão (body e path)
TYPE_FIELDS = ("type", "question_type")


# =============================================================================
# LIFECYCLE
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    config = get_config()
    set_level(config.log_level)
    logger.info("Starting Quiz Progress", **config.to_dict())
    app_state.get_bank()
    yield
    await app_state.cleanup()
    logger.info("Quiz Progress stopped")


app = FastAPI(
    title="Quiz Progress",
    description="Sessões de quiz por skill: montagem, correção e resultado final",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ProgressError)
async def progress_error_handler(request: Request, exc: ProgressError):
    """Converte erros de domínio em {errorType, errorMessage}."""
    if exc.status_code >= 500:
        logger.error("Erro no processamento", path=request.url.path, error=str(exc))
    else:
        logger.info("Requisição recusada", path=request.url.path, error_type=exc.error_type)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Erros de validação do request no mesmo formato dos erros de domínio."""
    errors = exc.errors()
    if any(e.get("loc") and e["loc"][-1] in TYPE_FIELDS for e in errors):
        error = UnsupportedQuestionType()
    else:
        first = errors[0] if errors else {}
        field = ".".join(str(part) for part in first.get("loc", ()))
        error = ValidationError(f"{field}: {first.get('msg', 'Invalid request')}")
    return await progress_error_handler(request, error)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/health")
async def health_check():
    """Detailed health check."""
    config = get_config()
    response = {
        "status": "healthy",
        "auth_enabled": config.auth_enabled,
    }

    try:
        response["bank"] = app_state.get_bank().check_health()
    except Exception as e:
        logger.warning("Health check do banco falhou", error=str(e))
        response["status"] = "degraded"
        response["bank"] = {"error": str(e)}

    try:
        engine = await app_state.get_engine()
        keys = await engine.store.list_keys()
        response["sessions"] = {"in_progress": len(keys)}
    except Exception as e:
        logger.warning("Health check do AgentFS falhou", error=str(e))
        response["status"] = "degraded"
        response["sessions"] = {"error": str(e)}

    return response


app.include_router(progress_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
