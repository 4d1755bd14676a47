"""
Errores de dominio y manejadores globales para respuestas de API consistentes.

Cada error de dominio conoce su status HTTP y el cuerpo JSON que ve el cliente.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class UsuarioError(Exception):
    """Base de los errores que la API traduce a una respuesta JSON."""

    status_code: int = 400
    message: str = "request failed"
    # Clave del mensaje en el cuerpo ("message" o "error")
    message_key: str = "message"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> Dict[str, Any]:
        return {"success": False, self.message_key: self.message}


class InsufficientFieldsError(UsuarioError):
    status_code = 400
    message = "insufficient fields"
    message_key = "error"


class MalformedIdError(UsuarioError):
    status_code = 400
    message = "malformed ID"
    message_key = "error"


class UsuarioNotFoundError(UsuarioError):
    status_code = 404
    message = "user not registered"


class UsuarioAlreadyRegisteredError(UsuarioError):
    status_code = 422
    message = "user already registered"


class StoreError(UsuarioError):
    """Fallo del almacenamiento; el status depende de la operación."""

    status_code = 400
    message = "store error"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("usuarios.errors")

    @app.exception_handler(UsuarioError)
    async def _usuario_error_handler(request: Request, exc: UsuarioError):
        body = exc.to_body()
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        if exc.status_code >= 422:
            log.warning("%s status=%s request_id=%s: %s", type(exc).__name__, exc.status_code, rid, exc.message)
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body: Dict[str, Any] = {"success": False, "message": exc.detail or "HTTP error"}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body: Dict[str, Any] = {"success": False, "message": "Validation error", "errors": jsonable_encoder(exc.errors())}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=422, content=body)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        body: Dict[str, Any] = {"success": False, "message": "Internal server error"}
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=500, content=body)
