"""Aplicação principal FastAPI"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from waterpolo.core.config import settings
from waterpolo.core.exceptions import MatchEngineError, MatchSaveError
from waterpolo.core.logging_config import setup_logging
from waterpolo.core.middleware import OptimizedMiddleware
from waterpolo.api.v1.api import api_router
import logging

# Configura logging
setup_logging()
logger = logging.getLogger(__name__)

# Rate Limiter por IP aplicado a todas as rotas; a mesa de registro faz muitas edições seguidas
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["5000/hour", "300/minute"]
)

# Cria aplicação FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="API de registro ao vivo de partidos de polo aquático e consistência das estatísticas",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Estado do limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(MatchEngineError)
async def match_engine_error_handler(request: Request, exc: MatchEngineError):
    """Erros de domínio viram 4xx com a mensagem para o usuário"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "field": exc.field, "error": type(exc).__name__},
    )


@app.exception_handler(MatchSaveError)
async def match_save_error_handler(request: Request, exc: MatchSaveError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(OptimizedMiddleware)

# Inclui routers
app.include_router(api_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """Endpoint raiz"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "endpoints": {
            "players": f"{settings.API_V1_PREFIX}/players",
            "matches": f"{settings.API_V1_PREFIX}/matches",
            "data_integrity": f"{settings.API_V1_PREFIX}/data-integrity/check"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION
    }


@app.on_event("startup")
async def startup_event():
    """Evento de startup"""
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} iniciando...")


@app.on_event("shutdown")
async def shutdown_event():
    """Evento de shutdown"""
    logger.info("Aplicação encerrando...")
    from waterpolo.core.cache import cache
    await cache.close()
    from waterpolo.core.database import close_db
    await close_db()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "waterpolo.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
