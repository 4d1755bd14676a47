"""Repo asíncrono de la colección de usuarios (Motor).

Los errores del driver (`PyMongoError`) se propagan; el servicio los traduce.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import ReturnDocument

from app.core.config import settings
from app.infrastructure.db.mongo_async import get_async_db


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _coll():
    return get_async_db()[settings.usuario_collection]


async def insert_usuario(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Inserta usuario sellando timestamps y devuelve el documento con `_id`."""
    data = dict(doc)
    now = _now_iso()
    data["created_at"] = now
    data["updated_at"] = now
    res = await _coll().insert_one(data)
    data["_id"] = res.inserted_id
    return data


async def list_usuarios() -> List[Dict[str, Any]]:
    return await _coll().find({}).to_list(length=None)


async def get_usuario_by_id(usuario_id: str) -> Optional[Dict[str, Any]]:
    return await _coll().find_one({"_id": ObjectId(usuario_id)})


async def replace_usuario_by_id(usuario_id: str, doc: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Reemplaza los campos del usuario; conserva `created_at`. Devuelve el doc ya actualizado."""
    fields = {k: doc[k] for k in ("displayName", "email", "senha")}
    fields["updated_at"] = _now_iso()
    return await _coll().find_one_and_update(
        {"_id": ObjectId(usuario_id)},
        {"$set": fields},
        return_document=ReturnDocument.AFTER,
    )


async def delete_usuario_by_id(usuario_id: str) -> Optional[Dict[str, Any]]:
    return await _coll().find_one_and_delete({"_id": ObjectId(usuario_id)})
