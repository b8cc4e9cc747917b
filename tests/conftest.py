"""Общие фикстуры для тестов gosset."""

import logging

import numpy as np
import pytest

from gosset.rankings import Rankings
from gosset.utils import logger as logger_module


@pytest.fixture
def tricot_matrix():
    """Шесть наблюдений, четыре сорта, все ранжированы полностью."""
    return np.array([
        [1, 2, 4, 3],
        [1, 4, 2, 3],
        [1, 2, 4, 3],
        [1, 2, 4, 3],
        [1, 3, 4, 2],
        [1, 4, 3, 2],
    ])


@pytest.fixture
def tricot_rankings(tricot_matrix):
    return Rankings(tricot_matrix, items=["A", "B", "C", "D"])


@pytest.fixture
def incomplete_rankings():
    """Триады: каждый участник ранжирует 3 сорта из 5, остальные - 0."""
    return Rankings(
        np.array([
            [1, 2, 3, 0, 0],
            [0, 1, 3, 2, 0],
            [2, 0, 0, 1, 3],
            [0, 0, 1, 3, 2],
        ]),
        items=["v1", "v2", "v3", "v4", "v5"],
    )


@pytest.fixture
def write_config(tmp_path):
    """Записывает YAML-конфиг во временный файл и возвращает путь."""
    def _write(text: str):
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def reset_gosset_logging():
    """Снимает обработчики с логгера gosset после теста."""
    yield
    logger_module._gosset_logger = None
    root = logging.getLogger("gosset")
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.addHandler(logging.NullHandler())
