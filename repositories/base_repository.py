"""
Repositorio base con operaciones CRUD comunes:
Este repositorio genérico liga una entidad pydantic a una única tabla y
delega la construcción y ejecución del SQL en un `TableRunner` y la
traducción entidad/fila en un `DataMapper`.
"""

from typing import TypeVar, Generic, List, Optional, Type, Any, Iterable, Union
from collections.abc import Mapping
import logging

from pydantic import BaseModel
from sqlalchemy.sql.expression import Select

from core.exceptions import (
    ConfigurationException,
    NotFoundException,
    QueryValidationException,
)
from core.utils import to_list
from database.db import RunnerFactory
from mapping.convention import Convention
from mapping.data_mapper import DataMapper
from models.query import FindOptions, SortDirection

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=BaseModel)


class Repository(Generic[T]):
    """
    Repositorio genérico que proporciona operaciones CRUD sobre una tabla.

    Solo se usa la primera columna identificadora en find_by_id, update y
    delete; los identificadores adicionales se aceptan pero no intervienen
    en las consultas.
    """

    def __init__(
        self,
        *,
        table: str,
        entity: Type[T],
        ids: Union[str, Iterable[str]],
        runner_factory: RunnerFactory,
        schema: Optional[str] = None,
        foreign_keys: Optional[Iterable[str]] = None,
        convention: Optional[Convention] = None,
    ):
        """
        Inicializa el repositorio. No realiza ninguna operación de E/S.

        Args:
            table: Nombre de la tabla
            entity: Clase pydantic de la entidad
            ids: Campo o campos identificadores de la entidad
            runner_factory: Callable que devuelve un runner ligado a `schema.tabla`
            schema: Esquema opcional de la tabla
            foreign_keys: Campos de clave foránea respaldados por columnas
            convention: Convención de nombres; por defecto `Convention()`
        """
        if not table:
            raise ConfigurationException("El nombre de la tabla es obligatorio")

        self.table = table
        self.schema = schema
        self._qualified_name = f"{schema}.{table}" if schema else table
        self.entity = entity
        self.entity_ids = ids
        self.foreign_keys = foreign_keys
        self.convention = convention or Convention()
        self.runner = runner_factory(self._qualified_name)
        self.data_mapper: DataMapper[T] = DataMapper(
            entity, ids, foreign_keys, self.convention
        )

    @property
    def qualified_name(self) -> str:
        """`schema.tabla` si hay esquema, si no `tabla`."""
        return self._qualified_name

    def _to_entities(self, rows: Iterable[Optional[Mapping]]) -> List[T]:
        # las filas ausentes (None) se descartan
        return [self.data_mapper.to_entity(row) for row in rows if row is not None]

    async def find_by_id(self, ids: Any) -> List[T]:
        """
        Obtiene entidades cuyo identificador está en `ids`.

        Args:
            ids: Un identificador o una secuencia de identificadores

        Returns:
            Lista de entidades en el orden devuelto por la base de datos
            (puede estar vacía; no sigue el orden de `ids`)
        """
        values = to_list(ids)
        if not values:
            return []

        table_ids = self.data_mapper.table_ids()
        query = self.runner.select(self.data_mapper.table_fields()).where(
            self.runner.column(table_ids[0]).in_(values)
        )
        rows = await self.runner.fetch(query)
        logger.debug(f"find_by_id en {self.qualified_name}: {len(rows)} filas")
        return self._to_entities(rows)

    def _build_find_query(self, options: FindOptions) -> Select:
        query = self.runner.select(self.data_mapper.table_fields())

        if options.limit > 0:
            query = query.limit(options.limit)
        if options.offset > 0:
            query = query.offset(options.offset)

        condition = options.condition()
        if condition is not None:
            column = self.data_mapper.to_table_field_name(condition.term)
            query = query.where(self.runner.column(column).in_(condition.values))

        for order in options.ordering():
            column = self.runner.column(order.column)
            query = query.order_by(
                column.desc() if order.order == SortDirection.desc else column.asc()
            )

        return query

    async def find(
        self,
        options: Optional[FindOptions] = None,
        *,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Any = None,
        conditions: Any = None,
    ) -> List[T]:
        """
        Busca entidades con paginación, filtro y ordenamiento opcionales.

        Args:
            options: Opciones ya construidas; excluye los demás argumentos
            limit: Máximo de entidades a devolver (0 o None = sin límite)
            offset: Entidades a saltar (0 o None = ninguna)
            order_by: Columna, `OrderBy`, {"column", "order"} o lista de ellos
            conditions: Diccionario con un único término y su valor o lista de valores

        Returns:
            Lista de entidades

        Raises:
            InvalidConditionException: Si `conditions` está mal formado
            InvalidOrderException: Si `order_by` está mal formado
            TypeError: Si se combinan `options` y argumentos sueltos
        """
        loose = (limit, offset, order_by, conditions)
        if options is not None and any(arg is not None for arg in loose):
            raise TypeError("find() acepta options o argumentos sueltos, no ambos")
        if options is None:
            options = FindOptions(
                limit=limit, offset=offset, order_by=order_by, conditions=conditions
            )

        try:
            query = self._build_find_query(options)
        except QueryValidationException as e:
            logger.warning(f"Consulta rechazada en {self.qualified_name}: {e.message} {e.details}")
            raise

        rows = await self.runner.fetch(query)
        logger.debug(f"find en {self.qualified_name}: {len(rows)} filas")
        return self._to_entities(rows)

    async def find_all(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        order_by: Any = None,
    ) -> List[T]:
        """
        Obtiene todas las entidades con paginación y ordenamiento.

        No admite condiciones; para filtrar usar `find`.
        """
        return await self.find(limit=limit, offset=offset, order_by=order_by)

    async def count(self, conditions: Any = None) -> int:
        """
        Cuenta las filas que cumplen la condición (todas si no se indica).

        Raises:
            InvalidConditionException: Si `conditions` está mal formado
        """
        query = self.runner.count()
        try:
            condition = FindOptions(conditions=conditions).condition()
        except QueryValidationException as e:
            logger.warning(f"Conteo rechazado en {self.qualified_name}: {e.message}")
            raise

        if condition is not None:
            column = self.data_mapper.to_table_field_name(condition.term)
            query = query.where(self.runner.column(column).in_(condition.values))

        return int(await self.runner.scalar(query) or 0)

    async def insert(self, entity: Union[T, Mapping]) -> T:
        """
        Crea una nueva fila a partir de la entidad.

        Args:
            entity: Instancia de la entidad o diccionario parcial

        Returns:
            La entidad tal como quedó almacenada
        """
        fields = self.data_mapper.table_fields()
        payload = self.data_mapper.table_fields_with_value(entity)

        rows = await self.runner.insert(payload, fields)
        created = self._to_entities(rows)[0]
        logger.info(f"Fila insertada en {self.qualified_name}")
        return created

    async def update(self, entity: Union[T, Mapping]) -> T:
        """
        Actualiza la fila identificada por el primer identificador de la entidad.

        Args:
            entity: Instancia de la entidad con el identificador asignado

        Returns:
            La entidad actualizada

        Raises:
            NotFoundException: Si ninguna fila tiene ese identificador
        """
        table_ids = self.data_mapper.table_ids()
        fields = self.data_mapper.table_fields()
        id_value = self.data_mapper.entity_id_value(entity)
        payload = self.data_mapper.table_fields_with_value(entity)

        rows = await self.runner.update(table_ids[0], id_value, payload, fields)
        updated = self._to_entities(rows)
        if not updated:
            logger.warning(f"Update sin filas en {self.qualified_name}: {table_ids[0]}={id_value}")
            raise NotFoundException(
                resource=self.entity.__name__,
                identifier=str(id_value),
            )
        return updated[0]

    async def delete(self, entity: Union[T, Mapping]) -> bool:
        """
        Elimina la fila identificada por el primer identificador de la entidad.

        Returns:
            True si se eliminó exactamente una fila, False en caso contrario
        """
        table_ids = self.data_mapper.table_ids()
        id_value = self.data_mapper.entity_id_value(entity)

        affected = await self.runner.delete(table_ids[0], id_value)
        if affected:
            logger.info(f"Eliminadas {affected} filas de {self.qualified_name}")
        return affected == 1
