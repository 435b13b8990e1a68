"""
DataMapper: traduce entre entidades pydantic y filas de una tabla.

La entidad es una subclase de `BaseModel`; sus campos, en orden de
declaración, definen las columnas que se leen y escriben. Los nombres de
columna se obtienen aplicando la `Convention` a cada nombre de campo.
"""

from collections.abc import Mapping
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar, Union
import logging

from pydantic import BaseModel

from core.exceptions import ConfigurationException
from core.utils import enum_to_value, to_list
from mapping.convention import Convention

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class DataMapper(Generic[T]):
    """
    Mapeador entre una entidad y las columnas de su tabla.

    Las claves foráneas son campos respaldados por columnas que la entidad
    puede no declarar; se leen del modelo (o de sus extras) al escribir.
    """

    def __init__(
        self,
        entity: Type[T],
        ids: Union[str, Iterable[str]],
        foreign_keys: Optional[Iterable[str]] = None,
        convention: Optional[Convention] = None,
    ):
        """
        Inicializa el mapeador.

        Args:
            entity: Clase pydantic de la entidad
            ids: Campo o campos identificadores (solo el primero se usa en consultas)
            foreign_keys: Campos de clave foránea adicionales
            convention: Convención de nombres; por defecto snake_case

        Raises:
            ConfigurationException: Si la entidad o los identificadores no son válidos
        """
        if not (isinstance(entity, type) and issubclass(entity, BaseModel)):
            raise ConfigurationException(
                f"La entidad debe ser un modelo pydantic: {entity!r}"
            )

        self.entity = entity
        self.convention = convention or Convention()
        self.entity_ids: List[str] = to_list(ids) if ids is not None else []
        # un dict {campo: tipo} también es válido como lista de claves foráneas
        self.foreign_keys: List[str] = list(foreign_keys or [])

        self._fields: List[str] = list(entity.model_fields)
        self._fields += [fk for fk in self.foreign_keys if fk not in entity.model_fields]

        if not self.entity_ids:
            raise ConfigurationException(f"{entity.__name__} requiere al menos un identificador")
        missing = [i for i in self.entity_ids if i not in self._fields]
        if missing:
            raise ConfigurationException(
                f"Identificadores desconocidos en {entity.__name__}: {missing}",
                details={"ids": missing},
            )

        self._columns: Dict[str, str] = {
            field: self.convention.to_table_field_name(field) for field in self._fields
        }
        self._fields_by_column: Dict[str, str] = {
            column: field for field, column in self._columns.items()
        }

    def to_table_field_name(self, entity_field_name: str) -> str:
        """Nombre de columna para un campo de la entidad."""
        if entity_field_name in self._columns:
            return self._columns[entity_field_name]
        return self.convention.to_table_field_name(entity_field_name)

    def table_ids(self) -> List[str]:
        """Columnas identificadoras, en el orden configurado."""
        return [self.to_table_field_name(field) for field in self.entity_ids]

    def table_fields(self) -> List[str]:
        """Columnas a seleccionar/escribir, en orden de declaración."""
        return [self._columns[field] for field in self._fields]

    def to_entity(self, row: Mapping) -> T:
        """
        Construye una entidad a partir de una fila.

        Args:
            row: Diccionario columna -> valor

        Returns:
            Instancia de la entidad (las columnas desconocidas se descartan)
        """
        data = {
            self._fields_by_column[column]: value
            for column, value in row.items()
            if column in self._fields_by_column
        }
        return self.entity.model_validate(data)

    def _field_values(self, entity: Union[T, Mapping]) -> tuple[Dict[str, Any], set]:
        if isinstance(entity, BaseModel):
            values = {field: getattr(entity, field) for field in type(entity).model_fields}
            explicit = set(entity.model_fields_set)
            for field, value in (entity.model_extra or {}).items():
                values[field] = value
                explicit.add(field)
            return values, explicit
        if isinstance(entity, Mapping):
            return dict(entity), set(entity)
        raise TypeError(
            f"Se esperaba {self.entity.__name__} o un diccionario, no {type(entity).__name__}"
        )

    def table_fields_with_value(self, entity: Union[T, Mapping]) -> Dict[str, Any]:
        """
        Columnas con valor para operaciones de escritura.

        Un campo se escribe si fue asignado explícitamente o si su valor no es
        None; los campos sin asignar y sin valor se omiten.

        Args:
            entity: Instancia de la entidad o diccionario parcial

        Returns:
            Diccionario columna -> valor
        """
        values, explicit = self._field_values(entity)
        payload: Dict[str, Any] = {}
        for field in self._fields:
            if field not in values:
                continue
            value = values[field]
            if value is None and field not in explicit:
                continue
            payload[self._columns[field]] = enum_to_value(value)
        return payload

    def entity_id_value(self, entity: Union[T, Mapping]) -> Any:
        """Valor del primer campo identificador de la entidad."""
        field = self.entity_ids[0]
        if isinstance(entity, Mapping):
            return entity.get(field)
        return getattr(entity, field, None)
