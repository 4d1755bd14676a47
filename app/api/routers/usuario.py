"""
Endpoints CRUD para `usuarios`.

La API es delgada: delega en `services/usuario_service.py`, que lanza errores
de dominio; `core/exceptions.py` los convierte en la respuesta JSON.
"""
from typing import Any, List

from fastapi import APIRouter, Depends, status

from app.api.deps import read_json_body
from app.api.schemas.usuario import (
    UsuarioCreateResponse,
    UsuarioMessageResponse,
    UsuarioOut,
    UsuarioResponse,
)
from app.services import usuario_service

router = APIRouter(prefix="/usuarios", tags=["Usuarios"])


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=UsuarioCreateResponse,
    summary="Crear usuario",
    description="Valida el body, hashea `senha` y crea el usuario. Email duplicado -> 422.",
)
async def create_usuario(body: Any = Depends(read_json_body)) -> UsuarioCreateResponse:
    created = await usuario_service.create_usuario(body)
    return UsuarioCreateResponse(message="user created successfully", usuario=UsuarioOut.from_doc(created))


@router.get("", response_model=List[UsuarioOut], summary="Listar usuarios")
async def list_usuarios() -> List[UsuarioOut]:
    return [UsuarioOut.from_doc(d) for d in await usuario_service.list_usuarios()]


@router.get("/{usuario_id}", response_model=UsuarioResponse, summary="Obtener usuario por id")
async def get_usuario(usuario_id: str) -> UsuarioResponse:
    found = await usuario_service.get_usuario(usuario_id)
    return UsuarioResponse(usuario=UsuarioOut.from_doc(found))


@router.put(
    "/{usuario_id}",
    response_model=UsuarioMessageResponse,
    summary="Actualizar usuario",
    description="Reemplaza displayName/email/senha. `senha` se vuelve a hashear siempre.",
)
async def update_usuario(usuario_id: str, body: Any = Depends(read_json_body)) -> UsuarioMessageResponse:
    updated = await usuario_service.update_usuario(usuario_id, body)
    return UsuarioMessageResponse(message="user updated successfully", usuario=UsuarioOut.from_doc(updated))


@router.delete("/{usuario_id}", response_model=UsuarioMessageResponse, summary="Eliminar usuario")
async def delete_usuario(usuario_id: str) -> UsuarioMessageResponse:
    deleted = await usuario_service.delete_usuario(usuario_id)
    return UsuarioMessageResponse(message="user deleted successfully", usuario=UsuarioOut.from_doc(deleted))
