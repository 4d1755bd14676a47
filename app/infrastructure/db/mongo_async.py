"""Cliente MongoDB asíncrono (Motor).

Lo usan los repositorios que atienden peticiones HTTP, para no bloquear el
event loop mientras se espera a la base.
"""
from __future__ import annotations

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from app.core.config import settings
from app.infrastructure.db.mongo import client_kwargs

_log = logging.getLogger("usuarios.mongo.async")

_aclient: Optional[AsyncIOMotorClient] = None
_adb: Optional[AsyncIOMotorDatabase] = None


def get_async_db() -> AsyncIOMotorDatabase:
    """Devuelve la DB asíncrona; inicializa lazy un único cliente/bd."""
    global _aclient, _adb
    if _adb is None:
        _aclient = _aclient or AsyncIOMotorClient(settings.mongo_uri, **client_kwargs())
        _adb = _aclient[settings.mongo_db]
        _log.info("Motor listo (db async inicializada)")
    return _adb


def close_async_db() -> None:
    """Cierra el cliente Motor (shutdown de la app)."""
    global _aclient, _adb
    if _aclient is not None:
        _aclient.close()
    _aclient = None
    _adb = None
