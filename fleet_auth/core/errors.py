# fleet_auth/core/errors.py
from typing import Any, Dict


class StorageError(Exception):
    """Falha de armazenamento/conectividade devolvida ao chamador, sem retry."""

    code = "STORAGE_ERROR"

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class ConstraintViolation(StorageError):
    """Violação de unique/foreign key (slug, jti, (client, name) ...)."""

    code = "UNIQUE_VIOLATION"
