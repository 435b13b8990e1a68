"""
Convención de nombres entre campos de entidad y columnas de tabla.
"""

import re

_FIRST_CAP = re.compile(r"(.)([A-Z][a-z]+)")
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")


class Convention:
    """
    Convención por defecto: los nombres de columna son snake_case.

    `createdAt` -> `created_at`; un nombre que ya está en snake_case no cambia.
    Se puede sustituir pasando otra instancia al repositorio.
    """

    def to_table_field_name(self, entity_field_name: str) -> str:
        name = _FIRST_CAP.sub(r"\1_\2", entity_field_name)
        return _ALL_CAP.sub(r"\1_\2", name).lower()
