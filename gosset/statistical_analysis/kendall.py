from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Iterable, Optional

import numpy as np
import pandas as pd
from scipy import stats

from gosset.rankings.decimal import is_decimal, rank_decimal
from gosset.statistical_analysis.adapters import InputAdapterFactory, align_inputs
from gosset.utils.config import load_config
from gosset.utils.errors import InvalidInputError
from gosset.utils.logger import get_logger, log_metric

logger = get_logger(__name__)


@dataclass(frozen=True)
class RowKendall:
    """Результат для одной строки: tau (None - не определён) и вес"""
    tau: Optional[float]
    weight: int

    @property
    def defined(self) -> bool:
        return self.tau is not None


@dataclass(frozen=True)
class KendallResult:
    """
    Коэффициент Кендалла и эффективный размер выборки.

    tau равен None, если корреляция не определена ни для одной строки
    """
    tau: Optional[float]
    effective_n: float
    n_rows: int = 1
    n_defined: int = 1

    def to_frame(self) -> pd.DataFrame:
        """Одна строка с колонками kendallTau и N_effective"""
        return pd.DataFrame({
            "kendallTau": [np.nan if self.tau is None else self.tau],
            "N_effective": [self.effective_n],
        })

    def to_dict(self) -> dict:
        return asdict(self)


def effective_sample_size(total_weight: float) -> float:
    """
    Эффективное N - число сортов, которое при полном ранжировании
    дало бы то же число парных сравнений:
    W = N * (N - 1) / 2  =>  N = 0.5 + sqrt(0.25 + 2 * W)
    """
    if total_weight < 0:
        raise InvalidInputError(f"Отрицательное число сравнений: {total_weight}")
    return float(0.5 + np.sqrt(0.25 + 2 * total_weight))


class KendallTauAnalyzer:
    """
    Коэффициент ранговой корреляции Кендалла (tau-b) между
    двумя наборами ранжирований с поправкой на эффективный N.

    Перед расчётом пропуски (и, при null_rm, нули) исключаются,
    дробные оценки переводятся в ранги (наибольшее значение - лучшее,
    отрицательные - в конце)
    """

    def __init__(self, config_path: Path | str | None = None, null_rm: Optional[bool] = None):
        self.config = load_config(config_path)

        if null_rm is None:
            null_rm = self.config["kendall"]["null_rm"]
        self.null_rm = bool(null_rm)

    @staticmethod
    def row_kendall(x, y, null_rm: bool = True) -> RowKendall:
        """
        tau и вес для одной пары векторов одинаковой длины
        """
        try:
            x = np.asarray(x, dtype=float)
            y = np.asarray(y, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Нечисловые входные данные: {e}")

        if x.shape != y.shape:
            raise InvalidInputError(f"Длины векторов не совпадают: {x.shape} и {y.shape}")

        keep = ~np.isnan(x) & ~np.isnan(y)

        # если null_rm, нули в любом из ранжирований считаются пропусками
        if null_rm:
            keep &= (x != 0) & (y != 0)

        x = x[keep]
        y = y[keep]

        if is_decimal(x).any():
            x = rank_decimal(x)
        if is_decimal(y).any():
            y = rank_decimal(y)

        n = len(x)
        weight = n * (n - 1) // 2

        # для менее двух сортов или константного ранжирования tau не определён
        if n < 2 or np.unique(x).size < 2 or np.unique(y).size < 2:
            return RowKendall(tau=None, weight=weight)

        tau, _ = stats.kendalltau(x, y)

        if np.isnan(tau):
            return RowKendall(tau=None, weight=weight)

        return RowKendall(tau=float(tau), weight=weight)

    @staticmethod
    def aggregate(rows: Iterable[RowKendall]) -> KendallResult:
        """
        Средневзвешенный tau по строкам и эффективный N.

        Строки с неопределённым tau исключаются и из числителя,
        и из знаменателя среднего, но их вес входит в эффективный N
        """
        rows = list(rows)

        total_weight = sum(row.weight for row in rows)
        defined = [row for row in rows if row.defined]
        defined_weight = sum(row.weight for row in defined)

        if defined_weight > 0:
            tau = sum(row.tau * row.weight for row in defined) / defined_weight
        else:
            tau = None

        return KendallResult(
            tau=tau,
            effective_n=effective_sample_size(total_weight),
            n_rows=len(rows),
            n_defined=len(defined)
        )

    def compute(self, x, y) -> KendallResult:
        """
        Корреляция Кендалла между x и y.

        x, y: векторы, матрицы (numpy, pandas, списки), Rankings,
        GroupedRankings или PairComp. Оба входа приводятся к числовым
        массивам; векторы дают одну строку, матрицы считаются построчно
        """
        x_input = InputAdapterFactory.adapt(x)
        y_input = InputAdapterFactory.adapt(y)
        x_values, y_values = align_inputs(x_input, y_input)

        if x_values.ndim == 1:
            row = self.row_kendall(x_values, y_values, self.null_rm)
            result = KendallResult(
                tau=row.tau,
                effective_n=effective_sample_size(row.weight),
                n_rows=1,
                n_defined=int(row.defined)
            )
        else:
            rows = [
                self.row_kendall(x_row, y_row, self.null_rm)
                for x_row, y_row in zip(x_values, y_values)
            ]
            result = self.aggregate(rows)

        if result.n_defined < result.n_rows:
            logger.warning(
                f"Kendall tau не определён для {result.n_rows - result.n_defined} "
                f"из {result.n_rows} строк"
            )

        context = {
            "x": x_input.kind.value,
            "y": y_input.kind.value,
            "n_rows": result.n_rows,
            "null_rm": self.null_rm,
        }
        log_metric(logger, "kendall_tau", np.nan if result.tau is None else result.tau, context)
        log_metric(logger, "N_effective", result.effective_n, context)

        return result


def kendall_tau(x, y, null_rm: bool = True) -> KendallResult:
    """Корреляция Кендалла между x и y (см. KendallTauAnalyzer.compute)"""
    return KendallTauAnalyzer(null_rm=null_rm).compute(x, y)
