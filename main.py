from fastapi import FastAPI
from contextlib import asynccontextmanager
import uvicorn
import logging

from sqlalchemy import text

from config import settings, configure_logging
from routes import (
    comic_books_router,
    series_router,
    artists_router,
    roles_router,
)
from database.db import create_tables, engine
from models.common import HealthCheckResponse

logger = logging.getLogger(__name__)

# Configurar logging al iniciar
configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Maneja el ciclo de vida de la aplicación."""
    # Startup
    try:
        create_tables()
    except Exception as e:
        logger.warning(f"Could not create database tables: {e}")
    yield
    # Shutdown
    engine.dispose()

app = FastAPI(
    title=settings.app_name,
    description="Gestor de biblioteca de cómics: series, números, artistas y sus créditos.",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    debug=settings.debug_mode
)


@app.get("/")
async def root():
    """Endpoint raíz con información de la API."""
    return {
        "message": f"{settings.app_name}",
        "version": settings.app_version,
        "status": "active",
        "environment": "production" if settings.is_production else "development",
        "docs": "/docs",
        "redoc": "/redoc"
    }

app.include_router(comic_books_router)
app.include_router(series_router)
app.include_router(artists_router)
app.include_router(roles_router)


@app.get("/health", response_model=HealthCheckResponse)
async def health_check():
    """Endpoint de health check con una consulta a la base de datos."""
    db_status = "unknown"
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        logger.error(f"Health check: database connection error: {e}")
        db_status = "disconnected"

    return HealthCheckResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        service=settings.app_name,
        version=settings.app_version,
        database=db_status,
        environment="production" if settings.is_production else "development",
    )

if __name__ == "__main__":
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        log_level="info"
    )
