"""
gosset: корреляция Кендалла для ранжирований полевых испытаний (tricot).

Разделы пакета:
- utils                : логирование, конфигурация, ошибки
- rankings             : перевод оценок в ранги, контейнеры ранжирований
- statistical_analysis : адаптеры входов, Kendall tau и эффективный N
"""

import logging

# Утилиты
from .utils import (
    setup_logging,
    get_logger,
    load_config,
    InvalidInputError,
)

# Ранжирования
from .rankings import (
    is_decimal,
    rank_decimal,
    Rankings,
    GroupedRankings,
    PairComp,
)

# Статистический анализ
from .statistical_analysis import (
    InputKind,
    KendallResult,
    KendallTauAnalyzer,
    effective_sample_size,
    kendall_tau,
)

# Без явного setup_logging() библиотека ничего не выводит
logging.getLogger("gosset").addHandler(logging.NullHandler())

__version__ = "0.1.0"

# Публичный API
__all__ = [
    # утилиты
    "setup_logging",
    "get_logger",
    "load_config",
    "InvalidInputError",

    # ранжирования
    "is_decimal",
    "rank_decimal",
    "Rankings",
    "GroupedRankings",
    "PairComp",

    # стат анализ
    "InputKind",
    "KendallResult",
    "KendallTauAnalyzer",
    "effective_sample_size",
    "kendall_tau",
]
