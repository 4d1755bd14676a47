"""Agregador de routers de la API."""
from fastapi import APIRouter
from app.api.routers import health, usuario

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(usuario.router)
