"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,
    ConflictError,
    DuplicateError,
    ExternalServiceError,

    # Datasets
    LOAD_ERROR_MESSAGE,
    DatasetLoadError,
    DataUnavailableError,
    UnknownSourceError,

    # Order list
    OrderEntryExistsError,
    EmptyOrderError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",
    "ConflictError",
    "DuplicateError",
    "ExternalServiceError",

    # Datasets
    "LOAD_ERROR_MESSAGE",
    "DatasetLoadError",
    "DataUnavailableError",
    "UnknownSourceError",

    # Order list
    "OrderEntryExistsError",
    "EmptyOrderError",
]
