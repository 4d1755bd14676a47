"""Hash de contraseñas con argon2id.

Los parámetros de costo salen de settings; el hasher se construye una vez.
"""
from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

from app.core.config import settings


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(
        time_cost=settings.password_time_cost,
        memory_cost=settings.password_memory_cost,
        parallelism=settings.password_parallelism,
        hash_len=32,
        salt_len=16,
        type=Type.ID,
    )


def hash_password(plain: str) -> str:
    """Devuelve el hash (formato PHC `$argon2id$...`) de `plain`."""
    return get_password_hasher().hash(plain)


def verify_password(hashed: str, plain: str) -> bool:
    try:
        return get_password_hasher().verify(hashed, plain)
    except (VerificationError, InvalidHashError):
        return False
