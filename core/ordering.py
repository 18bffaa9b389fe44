"""
Utilidades de ordenamiento compartidas por los repositorios.
"""

from typing import Any

from sqlalchemy import func


def text_ordering(column: Any) -> tuple:
    """
    Construye las cláusulas ORDER BY para una columna de texto.

    Títulos y nombres se ordenan sin distinguir mayúsculas ("amazing" antes
    que "Batman"). Los valores que solo difieren en mayúsculas se desempatan
    por el valor original (binario), así el orden es estable entre llamadas.

    Args:
        column: Columna de texto mapeada

    Returns:
        Tupla de cláusulas ORDER BY para expandir en ``order_by``
    """
    return (func.lower(column).asc(), column.asc())
