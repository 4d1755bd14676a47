"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar la colección de usuarios y la
unicidad de `email`. No tumba la app si algo falla; deja warnings.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo.errors import PyMongoError
from app.infrastructure.db.mongo import get_db
from app.core.config import settings

_log = logging.getLogger("usuarios.mongo.bootstrap")


USUARIO_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["displayName", "email", "senha", "created_at", "updated_at"],
    "properties": {
        "displayName": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 1},
        # Siempre un hash; nunca la contraseña original
        "senha": {"bsonType": "string", "minLength": 1},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}


def usuario_indexes() -> List[Dict[str, Any]]:
    return [
        {"keys": [("email", 1)], "unique": True, "name": "uniq_email"},
    ]


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if validator:
            # Intenta aplicar validator con collMod
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            db.create_collection(name)
    except PyMongoError:
        # Si collMod falla (no existe la colección), intenta crear con validator
        try:
            if name not in db.list_collection_names():
                if validator:
                    db.create_collection(name, validator={"$jsonSchema": validator})
                else:
                    db.create_collection(name)
        except PyMongoError as e:
            # No aborta el arranque; solo deja sin validator estricto.
            _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            coll.create_index(keys, **opts)
        except PyMongoError as e:
            # Ej.: datos previos con emails duplicados
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections() -> None:
    """
    Garantiza la colección de usuarios, su validador y el índice único de email.
    """
    name = settings.usuario_collection
    _collmod_or_create(name, USUARIO_VALIDATOR)
    _ensure_indexes(name, usuario_indexes())
    _log.info("Colección '%s' lista", name)
