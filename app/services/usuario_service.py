"""
Casos de uso del CRUD de usuarios.

Cada operación valida la entrada, hace a lo sumo una llamada al repositorio y
traduce el resultado a errores de dominio (ver `app.core.exceptions`).
"""
import logging
from typing import Any, Dict, List

from pymongo.errors import DuplicateKeyError, PyMongoError
from starlette.concurrency import run_in_threadpool

from app.api.schemas.usuario import UsuarioIn, is_valid_object_id, validate_usuario_payload
from app.core.config import settings
from app.core.exceptions import (
    MalformedIdError,
    StoreError,
    UsuarioAlreadyRegisteredError,
    UsuarioNotFoundError,
)
from app.infrastructure.security.password_hasher import hash_password
from app.repositories import usuario_repo as repo

_log = logging.getLogger("usuarios.service")


def _store_error(e: PyMongoError, status_code: int) -> StoreError:
    _log.warning("Store error (%s): %s", type(e).__name__, e)
    msg = str(e) if settings.expose_store_errors else None
    return StoreError(msg, status_code=status_code)


def _check_id(usuario_id: str) -> None:
    if not is_valid_object_id(usuario_id):
        raise MalformedIdError()


async def _hashed_doc(payload: UsuarioIn) -> Dict[str, Any]:
    doc = payload.model_dump()
    # argon2 es CPU-bound: fuera del event loop
    doc["senha"] = await run_in_threadpool(hash_password, payload.senha)
    return doc


async def create_usuario(raw: Any) -> Dict[str, Any]:
    payload = validate_usuario_payload(raw)
    doc = await _hashed_doc(payload)
    try:
        created = await repo.insert_usuario(doc)
    except DuplicateKeyError:
        raise UsuarioAlreadyRegisteredError(status_code=422)
    except PyMongoError as e:
        raise _store_error(e, 422)
    _log.info("Usuario creado id=%s", created.get("_id"))
    return created


async def list_usuarios() -> List[Dict[str, Any]]:
    return await repo.list_usuarios()


async def get_usuario(usuario_id: str) -> Dict[str, Any]:
    _check_id(usuario_id)
    try:
        found = await repo.get_usuario_by_id(usuario_id)
    except PyMongoError as e:
        raise _store_error(e, 400)
    if not found:
        raise UsuarioNotFoundError()
    return found


async def update_usuario(usuario_id: str, raw: Any) -> Dict[str, Any]:
    """Reemplaza displayName/email/senha. La contraseña se re-hashea siempre."""
    _check_id(usuario_id)
    payload = validate_usuario_payload(raw)
    doc = await _hashed_doc(payload)
    try:
        updated = await repo.replace_usuario_by_id(usuario_id, doc)
    except DuplicateKeyError:
        raise UsuarioAlreadyRegisteredError(status_code=400)
    except PyMongoError as e:
        raise _store_error(e, 400)
    if not updated:
        raise UsuarioNotFoundError()
    _log.info("Usuario actualizado id=%s", usuario_id)
    return updated


async def delete_usuario(usuario_id: str) -> Dict[str, Any]:
    _check_id(usuario_id)
    try:
        deleted = await repo.delete_usuario_by_id(usuario_id)
    except PyMongoError as e:
        raise _store_error(e, 400)
    if not deleted:
        raise UsuarioNotFoundError()
    _log.info("Usuario eliminado id=%s", usuario_id)
    return deleted
