""" Utilidades principales y componentes compartidos.

Este paquete contiene:

- Excepciones personalizadas
- Funciones auxiliares de normalización de valores
"""

from .exceptions import (
    AppException,
    NotFoundException,
    ValidationException,
    QueryErrorKind,
    QueryValidationException,
    InvalidConditionException,
    InvalidOrderException,
    ConfigurationException,
)
from .utils import (
    enum_to_value,
    is_empty,
    is_sequence,
    to_list,
)

__all__ = [
    # Excepciones
    "AppException",
    "NotFoundException",
    "ValidationException",
    "QueryErrorKind",
    "QueryValidationException",
    "InvalidConditionException",
    "InvalidOrderException",
    "ConfigurationException",
    # utils
    "enum_to_value",
    "is_empty",
    "is_sequence",
    "to_list",
]
