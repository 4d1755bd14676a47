"""
Fixtures compartidas.

- El repositorio Mongo se reemplaza por un fake en memoria que respeta la
  unicidad de `email` (igual que el índice `uniq_email`).
- Parámetros de argon2 bajos para que los tests sean rápidos.
"""
import os

os.environ.setdefault("PASSWORD_TIME_COST", "1")
os.environ.setdefault("PASSWORD_MEMORY_COST", "1024")
os.environ.setdefault("PASSWORD_PARALLELISM", "1")

from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.api.router import api_router
from app.core.exceptions import register_exception_handlers
from app.core.middleware import RequestIdMiddleware
from app.services import usuario_service


class FakeUsuarioRepo:
    """Mismo contrato que `app.repositories.usuario_repo`, en memoria."""

    def __init__(self) -> None:
        self.docs: Dict[ObjectId, Dict[str, Any]] = {}
        # Si se asigna, toda operación lanza este error
        self.fail_with: Optional[PyMongoError] = None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _check_unique_email(self, email: str, exclude: Optional[ObjectId] = None) -> None:
        for oid, d in self.docs.items():
            if oid != exclude and d["email"] == email:
                raise DuplicateKeyError(
                    "E11000 duplicate key error collection: usuarios index: uniq_email",
                    code=11000,
                )

    async def insert_usuario(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        self._maybe_fail()
        self._check_unique_email(doc["email"])
        data = dict(doc)
        data["_id"] = ObjectId()
        data["created_at"] = data["updated_at"] = "2026-01-01T00:00:00Z"
        self.docs[data["_id"]] = data
        return dict(data)

    async def list_usuarios(self) -> List[Dict[str, Any]]:
        self._maybe_fail()
        return [dict(d) for d in self.docs.values()]

    async def get_usuario_by_id(self, usuario_id: str) -> Optional[Dict[str, Any]]:
        self._maybe_fail()
        found = self.docs.get(ObjectId(usuario_id))
        return dict(found) if found else None

    async def replace_usuario_by_id(self, usuario_id: str, doc: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._maybe_fail()
        oid = ObjectId(usuario_id)
        if oid not in self.docs:
            return None
        self._check_unique_email(doc["email"], exclude=oid)
        current = self.docs[oid]
        current.update({k: doc[k] for k in ("displayName", "email", "senha")})
        current["updated_at"] = "2026-01-02T00:00:00Z"
        return dict(current)

    async def delete_usuario_by_id(self, usuario_id: str) -> Optional[Dict[str, Any]]:
        self._maybe_fail()
        return self.docs.pop(ObjectId(usuario_id), None)

    def stored(self, usuario_id: str) -> Dict[str, Any]:
        return self.docs[ObjectId(usuario_id)]


@pytest.fixture
def fake_repo(monkeypatch) -> FakeUsuarioRepo:
    repo = FakeUsuarioRepo()
    monkeypatch.setattr(usuario_service, "repo", repo)
    return repo


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")
    return app


@pytest.fixture
def client(fake_repo) -> TestClient:
    return TestClient(_build_app())


@pytest.fixture
def payload() -> Dict[str, str]:
    return {"displayName": "Maria Silva", "email": "maria@example.com", "senha": "s3nh4-segura"}
