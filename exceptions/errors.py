"""
Custom exception classes for the application.

Every error carries a machine code, a user-facing message and the HTTP
status the routes answer with.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "ORDER_ENTRY_EXISTS")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing state (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DuplicateError(ConflictError):
    """Duplicate resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "DUPLICATE",
        details: Optional[dict] = None
    ):
        super().__init__(
            message=message,
            code=code,
            details=details
        )


class ExternalServiceError(AppError):
    """Resource or service unavailable (503)."""

    def __init__(
        self,
        message: str,
        code: str = "SERVICE_UNAVAILABLE",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=503,
            details=details
        )


# ===================
# DATASETS
# ===================

LOAD_ERROR_MESSAGE = (
    "Erreur: Impossible de charger les fichiers de données. "
    "Rechargez la page pour réessayer."
)


class DatasetLoadError(ExternalServiceError):
    """A mercuriale could not be fetched or parsed. Terminal for the session."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            message=LOAD_ERROR_MESSAGE,
            code="DATASET_LOAD_ERROR",
            details={"source": source, "reason": reason}
        )
        self.source = source
        self.reason = reason


class DataUnavailableError(ExternalServiceError):
    """Command issued while the datasets are not loaded."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            message=LOAD_ERROR_MESSAGE,
            code="DATA_UNAVAILABLE",
            details={"reason": reason} if reason else None
        )


class UnknownSourceError(ValidationError):
    """Source tag is not one of the known mercuriales."""

    def __init__(self, source: str):
        super().__init__(
            message=f"Mercuriale inconnue: {source}",
            code="UNKNOWN_SOURCE",
            details={"source": source}
        )


# ===================
# ORDER LIST
# ===================

class OrderEntryExistsError(DuplicateError):
    """The (product code, source) pair is already in the order list."""

    def __init__(self, product_code: str, source: str):
        super().__init__(
            message=(
                f'Cet article de la mercuriale "{source}" '
                "est déjà dans la liste de commande."
            ),
            code="ORDER_ENTRY_EXISTS",
            details={"code": product_code, "source": source}
        )
        self.product_code = product_code
        self.source = source


class EmptyOrderError(ConflictError):
    """Export requested on an empty order list."""

    def __init__(self):
        super().__init__(
            message="La liste de commande est vide.",
            code="ORDER_EMPTY"
        )
