"""Cliente MongoDB síncrono (PyMongo).

Se usa en el arranque (ping + bootstrap de colecciones/índices) y en health.
Las operaciones CRUD de la API van por el cliente asíncrono (`mongo_async`).
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from app.core.config import settings

_log = logging.getLogger("usuarios.mongo")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def client_kwargs() -> Dict[str, Any]:
    """Opciones de conexión compartidas por los clientes sync y async."""
    kwargs: Dict[str, Any] = dict(serverSelectionTimeoutMS=15000)
    if settings.mongo_uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        if settings.mongo_tls_insecure:
            kwargs["tlsAllowInvalidCertificates"] = True
        if settings.mongo_tls_allow_invalid_hostnames:
            kwargs["tlsAllowInvalidHostnames"] = True
    return kwargs


def init_mongo() -> None:
    """
    Inicializa el cliente y valida conexión (ping).
    Llamar una sola vez en el startup de FastAPI.
    """
    global _client, _db
    try:
        _client = MongoClient(settings.mongo_uri, **client_kwargs())
        _client.admin.command("ping")
        _db = _client[settings.mongo_db]
        _log.info("Mongo conectado (db=%s)", settings.mongo_db)
    except ServerSelectionTimeoutError as e:
        # No tumbar la app: deja _db en None y loggea
        _log.warning("Mongo no accesible (timeout): %s", e)
        _client = None
        _db = None
    except PyMongoError as e:
        _log.warning("Error de conexión a Mongo: %s", e)
        _client = None
        _db = None


def get_db() -> Database:
    """
    Devuelve la referencia a la base de datos.
    Úsalo en repositorios/servicios, no en routers.
    """
    if _db is None:
        raise RuntimeError("Mongo no inicializado. Intenta más tarde.")
    return _db


def db_ready() -> bool:
    return _db is not None
