"""
PasswordHasher implementado com os hashers do Django.

O algoritmo é definido pela setting PASSWORD_HASHERS
(PBKDF2 por padrão).
"""

from django.contrib.auth.hashers import check_password, make_password


class DjangoPasswordHasher:
    """Adapter do port PasswordHasher sobre django.contrib.auth.hashers."""

    def hash(self, raw_password: str) -> str:
        return make_password(raw_password)

    def verify(self, raw_password: str, hashed: str) -> bool:
        if not hashed:
            return False
        return check_password(raw_password, hashed)
