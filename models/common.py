"""
Modelos de respuesta comunes para la API.

Estos modelos proporcionan respuestas consistentes y estandarizadas en los
endpoints de la API.
"""
from datetime import datetime, timezone
from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DeleteResponse(BaseModel):
    """Respuesta estándar para operaciones de eliminación."""
    success: bool = Field(True, description="Indica si la eliminación fue exitosa")
    message: str = Field(..., description="Mensaje descriptivo")
    deleted_id: int = Field(..., description="ID de la fila eliminada")
    timestamp: datetime = Field(default_factory=_utcnow)


class CountResponse(BaseModel):
    """Respuesta con un conteo de filas."""
    count: int = Field(..., ge=0, description="Número de filas")


class HealthCheckResponse(BaseModel):
    """Respuesta del health check."""
    status: str = Field(..., description="Estado general (healthy/unhealthy)")
    service: str = Field(..., description="Nombre del servicio")
    version: str = Field(..., description="Versión de la API")
    database: str = Field(..., description="Estado de la base de datos")
    environment: str = Field(..., description="Entorno (production/development)")
    timestamp: datetime = Field(default_factory=_utcnow)


def create_delete_response(message: str, deleted_id: int) -> dict:
    """Helper para crear respuestas de eliminación."""
    return DeleteResponse(message=message, deleted_id=deleted_id).model_dump()
