import numpy as np
from scipy.stats import rankdata

from gosset.utils.errors import InvalidInputError


def _as_numeric_vector(values) -> np.ndarray:
    arr = np.asarray(values)

    if arr.ndim != 1:
        raise InvalidInputError(
            f"Ожидается одномерный вектор, получена размерность {arr.ndim}"
        )
    if arr.size == 0:
        raise InvalidInputError("Пустой вектор значений")
    if arr.dtype == bool or not np.issubdtype(arr.dtype, np.number):
        raise InvalidInputError(f"Нечисловой вектор значений (dtype={arr.dtype})")

    return arr.astype(float)


def is_decimal(values) -> np.ndarray:
    """
    Поэлементная проверка на наличие дробной части.
    Пропуски (NaN) дробными не считаются
    """
    arr = np.asarray(values, dtype=float)
    with np.errstate(invalid="ignore"):
        return np.isfinite(arr) & (np.mod(arr, 1) != 0)


def rank_decimal(values) -> np.ndarray:
    """
    Переводит дробные оценки в целочисленные плотные ранги.

    Наибольшее значение получает ранг 1. Отрицательные значения всегда
    ранжируются после неотрицательных, между собой по убыванию
    (-1 лучше, чем -5). Равные значения получают общий ранг,
    следующий уровень получает следующий по порядку ранг.

    Args:
        values: Одномерный числовой вектор без пропусков

    Returns:
        np.ndarray целых рангов той же длины
    """
    arr = _as_numeric_vector(values)

    if np.isnan(arr).any():
        raise InvalidInputError("Вектор содержит пропуски, ранжирование невозможно")

    # по убыванию значения: отрицательные автоматически оказываются в хвосте
    ranks = rankdata(-arr, method="dense")

    return ranks.astype(int)
