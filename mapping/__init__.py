"""
Traducción entre entidades y filas de tabla.
"""

from .convention import Convention
from .data_mapper import DataMapper

__all__ = [
    "Convention",
    "DataMapper",
]
