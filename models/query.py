"""
Modelos de opciones de consulta para el repositorio.

Las opciones llegan como valores sueltos (cadenas, listas, diccionarios) y se
convierten aquí en variantes explícitas: `Condition` para el filtro,
`OrderBy` para el ordenamiento y `FindOptions` para la paginación.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from core.exceptions import InvalidConditionException, InvalidOrderException
from core.utils import is_empty, is_sequence, to_list


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


class OrderBy(BaseModel):
    """Una columna de ordenamiento con su dirección."""
    column: str = Field(..., min_length=1)
    order: SortDirection = SortDirection.asc

    @field_validator("order", mode="before")
    @classmethod
    def lower_direction(cls, v: Any) -> Any:
        """Acepta la dirección en cualquier combinación de mayúsculas."""
        if isinstance(v, str):
            return v.lower()
        return v


class Condition(BaseModel):
    """Filtro de pertenencia `term IN values` sobre un único campo."""
    term: str = Field(..., min_length=1)
    values: List[Any] = Field(..., min_length=1)

    @classmethod
    def from_mapping(cls, conditions: Any) -> "Condition":
        """
        Construye una condición a partir de un diccionario `{termino: valor}`.

        Args:
            conditions: Diccionario con exactamente una clave

        Returns:
            Condition con el valor normalizado a lista

        Raises:
            InvalidConditionException: Si el término o el valor no son válidos
        """
        if isinstance(conditions, Condition):
            return conditions
        if not isinstance(conditions, Mapping) or len(conditions) != 1:
            raise InvalidConditionException("condition term is invalid")

        term, value = next(iter(conditions.items()))
        if not isinstance(term, str) or not term or term == "0":
            raise InvalidConditionException(
                "condition term is invalid", details={"term": term}
            )

        # None, "", 0 y False cuentan como valor ausente
        if isinstance(value, Mapping) or not value:
            raise InvalidConditionException(
                "condition value is invalid", details={"term": term}
            )

        return cls(term=term, values=to_list(value))


def _order_item(item: Any) -> OrderBy:
    if isinstance(item, OrderBy):
        return item
    if isinstance(item, str):
        data: Any = {"column": item}
    elif isinstance(item, Mapping):
        if is_empty(item) or "column" not in item:
            raise InvalidOrderException()
        data = item
    else:
        raise InvalidOrderException(details={"value": repr(item)})

    try:
        return OrderBy.model_validate(data)
    except ValidationError as e:
        raise InvalidOrderException(details={"errors": e.errors()}) from e


def parse_order_by(value: Any) -> List[OrderBy]:
    """
    Normaliza `order_by` a una lista de `OrderBy`.

    Acepta el nombre de una columna, un `OrderBy`, un diccionario
    `{"column": ..., "order": ...}` o una secuencia de ellos. None, la cadena
    vacía y la lista vacía significan "sin ordenamiento".

    Raises:
        InvalidOrderException: Si el valor es un diccionario vacío o mal formado
    """
    if value is None:
        return []
    if isinstance(value, str) and not value:
        return []
    if is_sequence(value):
        return [_order_item(item) for item in value]
    return [_order_item(value)]


class FindOptions(BaseModel):
    """Opciones de `Repository.find`; None equivale a no indicar la opción."""
    limit: int = Field(0, ge=0, description="Máximo de filas; 0 = sin límite")
    offset: int = Field(0, ge=0, description="Filas a saltar; 0 = ninguna")
    order_by: Optional[Any] = Field(None, description="Columna o lista de ordenamientos")
    conditions: Optional[Any] = Field(None, description="Diccionario {termino: valor}")

    @field_validator("limit", "offset", mode="before")
    @classmethod
    def none_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v

    def condition(self) -> Optional[Condition]:
        """Condición validada, o None si no se indicó ninguna."""
        if self.conditions is None:
            return None
        return Condition.from_mapping(self.conditions)

    def ordering(self) -> List[OrderBy]:
        """Ordenamiento validado (lista vacía si no se indicó)."""
        return parse_order_by(self.order_by)
