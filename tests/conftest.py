"""
Configuración de fixtures para pytest.

Este módulo contiene fixtures reutilizables para todos los tests.
"""

import pytest
import pytest_asyncio
import os
from enum import Enum
from typing import AsyncGenerator, Dict, Any, List, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, Float, Integer, MetaData, String, Table
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

# Configurar para usar base de datos en memoria para tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from database.db import runner_factory
from repositories.base_repository import Repository


# ==================== Entity / Table ====================

class TipoMascota(str, Enum):
    perro = "perro"
    gato = "gato"
    ave = "ave"


class Mascota(BaseModel):
    """Entidad de prueba con nombres camelCase para ejercitar la convención."""
    model_config = ConfigDict(extra="allow")

    idMascota: Optional[int] = None
    nombre: str
    tipo: TipoMascota
    raza: Optional[str] = None
    edad: Optional[int] = None
    peso: Optional[float] = None


metadata = MetaData()

mascotas_table = Table(
    "mascotas",
    metadata,
    Column("id_mascota", Integer, primary_key=True, autoincrement=True),
    Column("nombre", String(50), nullable=False, unique=True),
    Column("tipo", String(20), nullable=False),
    Column("raza", String(50)),
    Column("edad", Integer),
    Column("peso", Float),
    Column("id_propietario", Integer, nullable=True),
)


# ==================== Database Fixtures ====================

@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def mascota_repository(db_engine: AsyncEngine) -> Repository[Mascota]:
    """Create a Repository bound to the mascotas table."""
    return Repository(
        table="mascotas",
        entity=Mascota,
        ids=["idMascota"],
        foreign_keys=["idPropietario"],
        runner_factory=runner_factory(db_engine),
    )


# ==================== Mascota Fixtures ====================

@pytest.fixture
def mascota_data() -> Dict[str, Any]:
    """Sample mascota data for testing."""
    return {
        "nombre": "Firulais",
        "tipo": "perro",
        "raza": "Labrador",
        "edad": 3,
        "peso": 25.5
    }


@pytest.fixture
def mascotas_data() -> List[Dict[str, Any]]:
    """Several mascotas with mixed tipos."""
    return [
        {"nombre": "Firulais", "tipo": "perro", "raza": "Labrador", "edad": 3, "peso": 25.5},
        {"nombre": "Michi", "tipo": "gato", "raza": "Siamés", "edad": 2, "peso": 4.5},
        {"nombre": "Piolin", "tipo": "ave", "raza": "Canario", "edad": 1, "peso": 0.1},
        {"nombre": "Rex", "tipo": "perro", "raza": "Pastor Alemán", "edad": 5, "peso": 30.0},
    ]


@pytest_asyncio.fixture
async def mascotas_instances(
    mascota_repository: Repository[Mascota],
    mascotas_data: List[Dict[str, Any]],
) -> List[Mascota]:
    """Insert several mascotas and return them as stored."""
    created = []
    for data in mascotas_data:
        created.append(await mascota_repository.insert(Mascota(**data)))
    return created


# ==================== Fake Runner ====================

class FakeRunner:
    """Runner that records statements and returns canned rows."""

    def __init__(self, engine_runner, rows=None, affected: int = 1):
        self._inner = engine_runner
        self.qualified_name = engine_runner.qualified_name
        self.rows = rows if rows is not None else []
        self.affected = affected
        self.calls: List[tuple] = []

    def select(self, fields):
        return self._inner.select(fields)

    def column(self, name):
        return self._inner.column(name)

    def count(self):
        return self._inner.count()

    async def fetch(self, query):
        self.calls.append(("fetch", query))
        return list(self.rows)

    async def scalar(self, query):
        self.calls.append(("scalar", query))
        return len(self.rows)

    async def insert(self, payload, returning):
        self.calls.append(("insert", payload, returning))
        return list(self.rows)

    async def update(self, where_column, where_value, payload, returning):
        self.calls.append(("update", where_column, where_value, payload, returning))
        return list(self.rows)

    async def delete(self, where_column, where_value):
        self.calls.append(("delete", where_column, where_value))
        return self.affected


@pytest.fixture
def fake_runner_factory():
    """Build a runner factory whose runner is a FakeRunner with the given rows."""
    from database.db import TableRunner

    def build(rows=None, affected: int = 1):
        holder: Dict[str, FakeRunner] = {}

        def factory(qualified_name: str) -> FakeRunner:
            runner = FakeRunner(TableRunner(None, qualified_name), rows, affected)
            holder["runner"] = runner
            return runner

        return factory, holder

    return build


def compile_sql(query) -> str:
    """Render a statement with literal values for assertions."""
    return str(query.compile(compile_kwargs={"literal_binds": True}))
