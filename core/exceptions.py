"""
Excepciones personalizadas para el repositorio.

Estas excepciones proporcionan una forma estructurada de manejar errores de
validación de consultas para que el código que llama pueda distinguirlos
sin comparar cadenas. Los errores de almacenamiento (SQLAlchemyError) no se
envuelven: se propagan tal cual.
"""

from enum import Enum
from typing import Optional, Any


class AppException(Exception):
    """Excepción base para todos los errores de la aplicación."""

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundException(AppException):
    """Excepción cuando un recurso no se encuentra."""

    def __init__(
        self,
        resource: str,
        identifier: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"{resource} no encontrado"
        if identifier:
            message += f": {identifier}"
        super().__init__(message=message, details=details)


class ValidationException(AppException):
    """Excepción para errores de validación."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if field:
            details = details or {}
            details["field"] = field
        super().__init__(message=message, details=details)


class QueryErrorKind(str, Enum):
    """Tipo de error de validación de una consulta."""
    INVALID_CONDITION = "invalid_condition"
    INVALID_ORDER = "invalid_order"


class QueryValidationException(ValidationException):
    """Excepción base para opciones de consulta mal formadas.

    `kind` permite ramificar de forma programática sobre el tipo de error.
    """

    kind: Optional[QueryErrorKind] = None

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, field=field, details=details)


class InvalidConditionException(QueryValidationException):
    """La condición tiene un término vacío/"0" o un valor ausente, vacío o no lista."""

    kind = QueryErrorKind.INVALID_CONDITION

    def __init__(
        self,
        message: str = "condition is invalid",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, field="conditions", details=details)


class InvalidOrderException(QueryValidationException):
    """El order_by es un objeto vacío o no tiene columna."""

    kind = QueryErrorKind.INVALID_ORDER

    def __init__(
        self,
        message: str = "order by is invalid",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, field="order_by", details=details)


class ConfigurationException(AppException):
    """Excepción cuando la configuración del repositorio es inválida."""

    def __init__(
        self,
        message: str = "Configuración de repositorio inválida",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details)
