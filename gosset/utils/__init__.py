"""
Утилиты пакета: логирование, конфигурация, ошибки
"""

from .logger import (
    GossetLogger,
    setup_logging,
    get_logger,
    log_metric,
    CustomFormatter,
    MetricsFilter
)

from .config import (
    DEFAULT_CONFIG,
    load_config,
    deep_update
)

from .errors import InvalidInputError

__all__ = [
    # logging
    'GossetLogger',
    'setup_logging',
    'get_logger',
    'log_metric',
    'CustomFormatter',
    'MetricsFilter',

    # config
    'DEFAULT_CONFIG',
    'load_config',
    'deep_update',

    # errors
    'InvalidInputError'
]
