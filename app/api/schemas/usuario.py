"""
Esquemas Pydantic para la colección de usuarios.

Reglas clave:
- `displayName`, `email` y `senha` son obligatorios y no vacíos.
- `senha` tiene entre 8 y 32 caracteres (se valida antes de hashear).
- Claves desconocidas del body se ignoran (no se persisten).
- `senha` nunca forma parte de una respuesta.
"""
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.core.exceptions import InsufficientFieldsError

OBJECT_ID_RE = re.compile(r"^[a-fA-F0-9]{24}$")


class UsuarioIn(BaseModel):
    """Body de creación y actualización."""
    model_config = ConfigDict(extra="ignore")

    displayName: str = Field(min_length=1)
    email: str = Field(min_length=1)
    senha: str = Field(min_length=8, max_length=32)


class UsuarioOut(BaseModel):
    """Respuesta pública de usuario (sin secretos)."""
    id: str
    displayName: str
    email: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "UsuarioOut":
        return cls(
            id=str(doc["_id"]),
            displayName=doc.get("displayName", ""),
            email=doc.get("email", ""),
            created_at=doc.get("created_at"),
            updated_at=doc.get("updated_at"),
        )


class UsuarioCreateResponse(BaseModel):
    message: str
    usuario: UsuarioOut


class UsuarioResponse(BaseModel):
    success: bool = True
    usuario: UsuarioOut


class UsuarioMessageResponse(BaseModel):
    success: bool = True
    message: str
    usuario: UsuarioOut


def validate_usuario_payload(raw: Any) -> UsuarioIn:
    """Valida el body crudo; cualquier fallo se reporta como campos insuficientes."""
    if not isinstance(raw, dict):
        raise InsufficientFieldsError()
    try:
        return UsuarioIn.model_validate(raw)
    except ValidationError as e:
        raise InsufficientFieldsError() from e


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and OBJECT_ID_RE.fullmatch(value) is not None
