"""
Capa de repositorio para el acceso a datos.
Este paquete contiene el repositorio genérico que liga una entidad a una tabla.
Los repositorios proporcionan una abstracción sobre el SQL y no deben contener
lógica de negocio.

"""

from .base_repository import Repository

__all__ = [
    "Repository",
]
