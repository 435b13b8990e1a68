"""módulo de base de datos: engine async y ejecutor de consultas ligado a una tabla."""
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import logging

from sqlalchemy import column, delete, func, insert, select, table, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql.expression import ColumnClause, Select, TableClause

#import configuration
from config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def create_engine_from_settings(settings: Optional[Settings] = None) -> AsyncEngine:
    """Crea el engine async con la configuración centralizada.

    Args:
        settings: Configuración a usar; por defecto la global

    Returns:
        AsyncEngine: Engine de SQLAlchemy
    """
    settings = settings or default_settings
    url = settings.database_url
    kwargs: Dict[str, Any] = {
        "echo": settings.database_echo,
        "pool_pre_ping": True,  #verifica conexiones antes de usarlas
    }
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url:
            #una sola conexión para que todas las llamadas vean la misma base
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_recycle"] = settings.database_pool_recycle

    engine = create_async_engine(url, **kwargs)
    logger.info(f"Engine creado para {get_database_url(engine)}")
    return engine


def get_database_url(engine: AsyncEngine) -> str:
    """Obtiene la URL de la base de datos (sin credenciales sensibles)."""
    return engine.url.render_as_string(hide_password=True)


def split_qualified_name(qualified_name: str) -> Tuple[Optional[str], str]:
    """Separa `schema.tabla` en (schema, tabla); schema es None si no hay prefijo."""
    schema, _, table_name = qualified_name.rpartition(".")
    return (schema or None), table_name


class TableRunner:
    """
    Ejecuta sentencias sobre una única tabla.

    Construye cláusulas ligeras (`table()`/`column()`) con las columnas que
    recibe en cada llamada, así que no necesita reflejar el esquema. Las
    lecturas usan una conexión sin transacción explícita; cada escritura
    corre en su propia transacción. Los errores de SQLAlchemy se registran y
    se propagan sin cambios.
    """

    def __init__(self, engine: AsyncEngine, qualified_name: str):
        self.engine = engine
        self.qualified_name = qualified_name
        self.schema, self.table_name = split_qualified_name(qualified_name)

    def table(self, columns: Iterable[str] = ()) -> TableClause:
        """Cláusula de tabla con las columnas indicadas (sin duplicados)."""
        return table(
            self.table_name,
            *(column(name) for name in dict.fromkeys(columns)),
            schema=self.schema,
        )

    def column(self, name: str) -> ColumnClause:
        """Columna suelta para filtros y ordenamientos."""
        return column(name)

    def select(self, fields: Iterable[str]) -> Select:
        """SELECT de las columnas indicadas sobre la tabla."""
        tbl = self.table(fields)
        return select(*tbl.c).select_from(tbl)

    def count(self) -> Select:
        """SELECT count(*) sobre la tabla."""
        return select(func.count()).select_from(self.table())

    async def fetch(self, query: Select) -> List[Row]:
        """Ejecuta una consulta y devuelve las filas como diccionarios."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(query)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error al consultar {self.qualified_name}: {e}")
            raise

    async def scalar(self, query: Select) -> Any:
        """Ejecuta una consulta y devuelve el primer valor de la primera fila."""
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(query)
                return result.scalar()
        except SQLAlchemyError as e:
            logger.error(f"Error al consultar {self.qualified_name}: {e}")
            raise

    async def insert(self, payload: Dict[str, Any], returning: List[str]) -> List[Row]:
        """INSERT de una fila devolviendo las columnas de `returning`."""
        tbl = self.table([*payload, *returning])
        stmt = (
            insert(tbl)
            .values(payload)
            .returning(*(tbl.c[name] for name in returning))
        )
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error al insertar en {self.qualified_name}: {e}")
            raise

    async def update(
        self,
        where_column: str,
        where_value: Any,
        payload: Dict[str, Any],
        returning: List[str],
    ) -> List[Row]:
        """UPDATE de las filas donde `where_column = where_value`."""
        tbl = self.table([where_column, *payload, *returning])
        stmt = (
            update(tbl)
            .where(tbl.c[where_column] == where_value)
            .values(payload)
            .returning(*(tbl.c[name] for name in returning))
        )
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(f"Error al actualizar {self.qualified_name}: {e}")
            raise

    async def delete(self, where_column: str, where_value: Any) -> int:
        """DELETE de las filas donde `where_column = where_value`.

        Returns:
            Número de filas afectadas
        """
        tbl = self.table([where_column])
        stmt = delete(tbl).where(tbl.c[where_column] == where_value)
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(stmt)
                return result.rowcount
        except SQLAlchemyError as e:
            logger.error(f"Error al eliminar en {self.qualified_name}: {e}")
            raise


RunnerFactory = Callable[[str], TableRunner]


def runner_factory(engine: AsyncEngine) -> RunnerFactory:
    """Devuelve una fábrica que liga un `TableRunner` a cada nombre de tabla."""

    def bind(qualified_name: str) -> TableRunner:
        return TableRunner(engine, qualified_name)

    return bind
