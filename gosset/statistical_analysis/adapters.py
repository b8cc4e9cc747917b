from dataclasses import dataclass
from enum import Enum
from numbers import Number
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from gosset.rankings.objects import Rankings, GroupedRankings, PairComp
from gosset.utils.errors import InvalidInputError
from gosset.utils.logger import get_logger

logger = get_logger(__name__)


class InputKind(Enum):
    """Формы входных данных для корреляции Кендалла"""
    VECTOR = "vector"
    MATRIX = "matrix"
    RANKINGS = "rankings"
    GROUPED_RANKINGS = "grouped_rankings"
    PAIRCOMP = "paircomp"


@dataclass
class AdaptedInput:
    """
    Вход, приведённый к числовому массиву.
    values: 1D для VECTOR, 2D для остальных; пропуски - NaN
    """
    kind: InputKind
    values: np.ndarray
    items: Optional[List[str]] = None


def _labels(index: pd.Index) -> Optional[List[str]]:
    if isinstance(index, pd.RangeIndex):
        return None
    return [str(label) for label in index]


def _as_float_array(obj) -> np.ndarray:
    """Числовой массив из array-like; None и NaN становятся пропусками"""
    try:
        arr = np.asarray(obj)
    except ValueError as e:
        raise InvalidInputError(f"Строки входных данных разной длины: {e}")

    if arr.dtype.kind == "b":
        raise InvalidInputError("Логические значения не являются рангами")
    if arr.dtype.kind == "c":
        raise InvalidInputError("Комплексные значения не являются рангами")

    if arr.dtype.kind == "O":
        for value in arr.ravel():
            if value is None:
                continue
            if isinstance(value, (bool, np.bool_, complex, np.complexfloating)) or not isinstance(value, Number):
                raise InvalidInputError(f"Нечисловое значение во входных данных: {value!r}")
        arr = np.where(arr == None, np.nan, arr)  # noqa: E711

    elif not np.issubdtype(arr.dtype, np.number):
        raise InvalidInputError(f"Нечисловые входные данные (dtype={arr.dtype})")

    return arr.astype(float)


def _check_frame_numeric(frame: pd.DataFrame):
    for column in frame.columns:
        dtype = frame[column].dtype
        if pd.api.types.is_bool_dtype(dtype) or not pd.api.types.is_numeric_dtype(dtype):
            raise InvalidInputError(
                f"Столбец '{column}' нечисловой (dtype={dtype})"
            )


def _adapt_vector(obj) -> AdaptedInput:
    if isinstance(obj, pd.Series):
        if pd.api.types.is_bool_dtype(obj.dtype) or not pd.api.types.is_numeric_dtype(obj.dtype):
            raise InvalidInputError(f"Нечисловой вектор (dtype={obj.dtype})")
        values = obj.to_numpy(dtype=float, na_value=np.nan)
        return AdaptedInput(InputKind.VECTOR, values, _labels(obj.index))

    return AdaptedInput(InputKind.VECTOR, _as_float_array(obj))


def _adapt_matrix(obj) -> AdaptedInput:
    if isinstance(obj, pd.DataFrame):
        _check_frame_numeric(obj)
        values = obj.to_numpy(dtype=float, na_value=np.nan)
        return AdaptedInput(InputKind.MATRIX, values, _labels(obj.columns))

    return AdaptedInput(InputKind.MATRIX, _as_float_array(obj))


def _adapt_rankings(obj: Rankings) -> AdaptedInput:
    items = list(obj.items) if obj.has_labels else None
    return AdaptedInput(InputKind.RANKINGS, obj.as_matrix(), items)


def _adapt_grouped_rankings(obj: GroupedRankings) -> AdaptedInput:
    items = list(obj.items) if obj.has_labels else None
    return AdaptedInput(InputKind.GROUPED_RANKINGS, obj.as_matrix(), items)


def _adapt_paircomp(obj: PairComp) -> AdaptedInput:
    grouped = obj.to_grouped_rankings()
    return AdaptedInput(InputKind.PAIRCOMP, grouped.as_matrix(), list(grouped.items))


def detect_input_kind(obj) -> InputKind:
    """Определяет форму входных данных"""
    if isinstance(obj, PairComp):
        return InputKind.PAIRCOMP
    if isinstance(obj, GroupedRankings):
        return InputKind.GROUPED_RANKINGS
    if isinstance(obj, Rankings):
        return InputKind.RANKINGS
    if isinstance(obj, pd.Series):
        return InputKind.VECTOR
    if isinstance(obj, pd.DataFrame):
        return InputKind.MATRIX

    if obj is None or isinstance(obj, (str, bytes, dict)):
        raise InvalidInputError(f"Неподдерживаемый тип входных данных: {type(obj).__name__}")

    try:
        ndim = np.ndim(obj)
    except ValueError as e:
        raise InvalidInputError(f"Строки входных данных разной длины: {e}")

    if ndim == 1:
        return InputKind.VECTOR
    if ndim == 2:
        return InputKind.MATRIX

    raise InvalidInputError(
        f"Ожидается вектор или матрица, получена размерность {ndim} "
        f"({type(obj).__name__})"
    )


class InputAdapterFactory:
    """
    Фабрика адаптеров: приводит любой поддерживаемый вход
    к числовому массиву
    """

    # Реестр адаптеров по форме входа
    _adapters = {
        InputKind.VECTOR: _adapt_vector,
        InputKind.MATRIX: _adapt_matrix,
        InputKind.RANKINGS: _adapt_rankings,
        InputKind.GROUPED_RANKINGS: _adapt_grouped_rankings,
        InputKind.PAIRCOMP: _adapt_paircomp,
    }

    @classmethod
    def adapt(cls, obj) -> AdaptedInput:
        """
        Определяет форму входа и применяет соответствующий адаптер
        """
        kind = detect_input_kind(obj)
        adapted = cls._adapters[kind](obj)

        logger.debug(f"Вход {kind.value}: форма {adapted.values.shape}")

        return adapted

    @classmethod
    def get_available_kinds(cls):
        """
        Возвращает список поддерживаемых форм входа
        """
        return [kind.value for kind in cls._adapters.keys()]


def align_inputs(x: AdaptedInput, y: AdaptedInput) -> Tuple[np.ndarray, np.ndarray]:
    """
    Проверяет совместимость двух входов и выравнивает столбцы y по x.

    Если у обоих входов есть названия сортов с одинаковым набором,
    столбцы y переставляются в порядок x. Иначе сопоставление позиционное
    """
    x_values, y_values = x.values, y.values

    if x_values.ndim != y_values.ndim:
        raise InvalidInputError(
            f"Несовместимые формы входов: {x.kind.value} и {y.kind.value}"
        )
    if x_values.size == 0 or y_values.size == 0:
        raise InvalidInputError(
            f"Пустые входные данные: {x_values.shape} и {y_values.shape}"
        )
    if x_values.shape != y_values.shape:
        raise InvalidInputError(
            f"Размерности не совпадают: {x_values.shape} и {y_values.shape}"
        )

    if x.items is not None and y.items is not None and x.items != y.items:
        if set(x.items) != set(y.items) or len(set(x.items)) != len(x.items):
            raise InvalidInputError(
                f"Наборы сортов не совпадают: {sorted(set(x.items) ^ set(y.items))}"
            )
        order = [y.items.index(item) for item in x.items]
        y_values = y_values[..., order]
        logger.debug("Столбцы y переставлены в порядок сортов x")

    return x_values, y_values
