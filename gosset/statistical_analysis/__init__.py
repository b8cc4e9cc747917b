"""
Модуль статистического анализа ранжирований.

Содержит:
1. Адаптеры входных данных (векторы, матрицы, ранжирования, парные сравнения)
2. Коэффициент Кендалла tau с эффективным N
"""

from .adapters import (
    InputKind,
    AdaptedInput,
    InputAdapterFactory,
    detect_input_kind,
    align_inputs
)

from .kendall import (
    RowKendall,
    KendallResult,
    KendallTauAnalyzer,
    effective_sample_size,
    kendall_tau
)

__all__ = [
    # adapters
    "InputKind",
    "AdaptedInput",
    "InputAdapterFactory",
    "detect_input_kind",
    "align_inputs",

    # kendall tau
    "RowKendall",
    "KendallResult",
    "KendallTauAnalyzer",
    "effective_sample_size",
    "kendall_tau"
]
