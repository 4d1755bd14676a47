"""
Dependencias reutilizables para routers (FastAPI Depends).

- Mantener esta capa delgada: sin lógica de negocio.
"""
import json
from typing import Any

from fastapi import Request


async def read_json_body(request: Request) -> Any:
    """Body JSON crudo de la petición, o None si falta o no es JSON válido.

    La validación de forma la hace el servicio, para responder 400 y no el 422
    automático de FastAPI.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        return None
