"""
Ранжирования: перевод дробных оценок в ранги и контейнеры ранжирований
(обычные, сгруппированные, парные сравнения)
"""

from .decimal import (
    is_decimal,
    rank_decimal
)

from .objects import (
    Rankings,
    GroupedRankings,
    PairComp
)

__all__ = [
    # перевод оценок в ранги
    "is_decimal",
    "rank_decimal",

    # контейнеры
    "Rankings",
    "GroupedRankings",
    "PairComp"
]
