from dataclasses import dataclass, field
from itertools import combinations
from typing import List, Optional, Sequence, Tuple, Hashable

import numpy as np
import pandas as pd

from gosset.utils.errors import InvalidInputError
from gosset.utils.logger import get_logger

logger = get_logger(__name__)


def _default_items(n_items: int) -> List[str]:
    return [f"item_{i + 1}" for i in range(n_items)]


@dataclass(frozen=True)
class Rankings:
    """
    Матрица рангов: строки - наблюдения, столбцы - сорта (items).
    0 означает, что сорт в этом наблюдении не ранжировался
    """
    matrix: np.ndarray
    items: Optional[List[str]] = None
    has_labels: bool = field(init=False, default=False)

    def __post_init__(self):
        try:
            matrix = np.asarray(self.matrix, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Нечисловая матрица рангов: {e}")

        if matrix.ndim != 2:
            raise InvalidInputError(
                f"Матрица рангов должна быть двумерной, получена размерность {matrix.ndim}"
            )
        if np.isnan(matrix).any():
            raise InvalidInputError("Матрица рангов содержит пропуски, используйте 0")
        if (matrix < 0).any() or (np.mod(matrix, 1) != 0).any():
            raise InvalidInputError("Ранги должны быть неотрицательными целыми числами")

        items = self.items
        # без явных названий столбцы сопоставляются по позиции
        object.__setattr__(self, 'has_labels', items is not None)
        if items is None:
            items = _default_items(matrix.shape[1])
        items = [str(item) for item in items]
        if len(items) != matrix.shape[1]:
            raise InvalidInputError(
                f"Число названий сортов ({len(items)}) не совпадает "
                f"с числом столбцов ({matrix.shape[1]})"
            )
        if len(set(items)) != len(items):
            raise InvalidInputError("Названия сортов должны быть уникальными")

        object.__setattr__(self, 'matrix', matrix.astype(int))
        object.__setattr__(self, 'items', items)

    def __len__(self) -> int:
        return self.matrix.shape[0]

    @property
    def n_items(self) -> int:
        return self.matrix.shape[1]

    def as_matrix(self) -> np.ndarray:
        """Копия матрицы рангов в виде float-массива"""
        return self.matrix.astype(float)


@dataclass(frozen=True)
class GroupedRankings:
    """
    Ранжирования, сгруппированные по наблюдениям (участникам).
    index[i] - идентификатор группы для строки i
    """
    rankings: Rankings
    index: Sequence[Hashable]

    def __post_init__(self):
        if not isinstance(self.rankings, Rankings):
            raise InvalidInputError("GroupedRankings ожидает объект Rankings")

        index = list(self.index)
        if len(index) != len(self.rankings):
            raise InvalidInputError(
                f"Длина индекса групп ({len(index)}) не совпадает "
                f"с числом ранжирований ({len(self.rankings)})"
            )
        object.__setattr__(self, 'index', index)

    def __len__(self) -> int:
        return len(self.groups)

    @property
    def items(self) -> List[str]:
        return self.rankings.items

    @property
    def has_labels(self) -> bool:
        return self.rankings.has_labels

    @property
    def groups(self) -> List[Hashable]:
        """Идентификаторы групп в порядке первого появления"""
        return list(dict.fromkeys(self.index))

    def as_matrix(self) -> np.ndarray:
        """
        Разворачивает группировку в плоскую матрицу рангов:
        строки группы идут подряд, группы в порядке первого появления
        """
        codes, _ = pd.factorize(pd.Series(self.index, dtype=object))
        order = np.argsort(codes, kind="stable")
        return self.rankings.matrix[order].astype(float)


@dataclass(frozen=True)
class PairComp:
    """
    Парные сравнения по наблюдениям.

    values[o, p]: 1 - предпочтён первый сорт пары p,
    -1 - второй, 0 - без предпочтения, NaN - сравнения нет
    """
    values: np.ndarray
    items: List[str]
    pairs: Optional[List[Tuple[int, int]]] = field(default=None)

    def __post_init__(self):
        try:
            values = np.asarray(self.values, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Нечисловые парные сравнения: {e}")

        if values.ndim != 2:
            raise InvalidInputError(
                f"Парные сравнения должны быть двумерными, получена размерность {values.ndim}"
            )

        items = [str(item) for item in self.items]
        pairs = self.pairs
        if pairs is None:
            pairs = list(combinations(range(len(items)), 2))
        pairs = [(int(a), int(b)) for a, b in pairs]

        if len(pairs) != values.shape[1]:
            raise InvalidInputError(
                f"Число пар ({len(pairs)}) не совпадает с числом столбцов ({values.shape[1]})"
            )
        for a, b in pairs:
            if a == b or not (0 <= a < len(items) and 0 <= b < len(items)):
                raise InvalidInputError(f"Некорректная пара сортов: ({a}, {b})")

        observed = values[~np.isnan(values)]
        if not np.isin(observed, (-1, 0, 1)).all():
            raise InvalidInputError("Парные сравнения допускают только значения -1, 0, 1")

        object.__setattr__(self, 'values', values)
        object.__setattr__(self, 'items', items)
        object.__setattr__(self, 'pairs', pairs)

    def __len__(self) -> int:
        return self.values.shape[0]

    def to_grouped_rankings(self) -> GroupedRankings:
        """
        Каждое наблюдённое сравнение становится отдельным ранжированием
        двух сортов, сгруппированным по номеру наблюдения
        """
        rows = []
        index = []

        for obs, obs_values in enumerate(self.values):
            for (a, b), value in zip(self.pairs, obs_values):
                if np.isnan(value):
                    continue

                row = np.zeros(len(self.items), dtype=int)
                if value > 0:
                    row[a], row[b] = 1, 2
                elif value < 0:
                    row[a], row[b] = 2, 1
                else:
                    row[a], row[b] = 1, 1

                rows.append(row)
                index.append(obs)

        if not rows:
            raise InvalidInputError("Нет ни одного наблюдённого парного сравнения")

        logger.debug(
            f"Парные сравнения: {len(self)} наблюдений -> {len(rows)} ранжирований"
        )

        return GroupedRankings(Rankings(np.vstack(rows), self.items), index)
