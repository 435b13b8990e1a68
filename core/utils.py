"""
Funciones de utilidad generales.
"""

from typing import Any, List
from collections.abc import Mapping
from enum import Enum as PyEnum


def enum_to_value(value: Any) -> Any:
    """
    Convierte un Enum a su valor, o devuelve el valor sin cambios.

    Args:
        value: Valor a convertir

    Returns:
        Enum.value si value es un Enum, de lo contrario el valor sin cambios
    """
    if isinstance(value, PyEnum):
        return value.value
    return value


def is_empty(value: Any) -> bool:
    """
    Indica si un valor está vacío.

    None, cadenas vacías y colecciones sin elementos se consideran vacíos.
    Los números y booleanos nunca están vacíos (0 y False son valores válidos).

    Args:
        value: Valor a evaluar

    Returns:
        True si el valor está vacío
    """
    if value is None:
        return True
    if isinstance(value, (str, bytes)):
        return len(value) == 0
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def is_sequence(value: Any) -> bool:
    """True para listas, tuplas y conjuntos; las cadenas son escalares."""
    return isinstance(value, (list, tuple, set, frozenset))


def to_list(value: Any) -> List[Any]:
    """
    Normaliza un escalar o una secuencia a lista.

    Args:
        value: Valor escalar o secuencia de valores

    Returns:
        Lista con los valores (un escalar se envuelve en una lista de un elemento)
    """
    if is_sequence(value):
        return list(value)
    return [value]
