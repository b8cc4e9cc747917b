import logging
import logging.handlers
import sys
import json
from pathlib import Path
from datetime import datetime
from typing import Optional, Dict, Any

from .config import load_config


ROOT_LOGGER_NAME = 'gosset'


class CustomFormatter(logging.Formatter):
    """Кастомный форматтер с временными метками"""

    def format(self, record):
        # Добавляем timestamp ко всем записям
        record.timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
        return super().format(record)


class MetricsFilter(logging.Filter):
    """Фильтр для отбора записей METRIC"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = getattr(record, 'msg', '')
        if isinstance(message, str) and message.startswith('METRIC '):
            return True
        return False


class GossetLogger:
    """
    Система логирования пакета.

    Консоль всегда, файлы с ротацией только если в конфигурации
    задан logging.log_dir
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 config_path: Optional[str] = None):
        if config is None:
            config = load_config(config_path)['logging']
        self.config = config

        log_dir = self.config.get('log_dir')
        self.log_dir = Path(log_dir) if log_dir else None

        self._setup_logging()

    def _setup_logging(self):
        """Настраивает всю систему логирования"""
        main_logger = logging.getLogger(ROOT_LOGGER_NAME)
        main_logger.setLevel(logging.DEBUG)
        for handler in list(main_logger.handlers):
            handler.close()
            main_logger.removeHandler(handler)

        self._setup_console_handler(main_logger)

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._setup_file_handlers(main_logger)

        main_logger.debug("Система логирования инициализирована")
        if self.log_dir is not None:
            main_logger.debug(f"Директория логов: {self.log_dir}")

    def _setup_console_handler(self, logger: logging.Logger):
        """Настраивает вывод в консоль"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, self.config['console_level']))

        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)-8s [%(name)s] %(message)s',
            datefmt='%H:%M:%S'
        )
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    def _setup_file_handlers(self, logger: logging.Logger):
        """Настраивает файловые обработчики с ротацией"""
        rotation_config = self.config['rotation']

        # 1. Основной лог-файл (ВСЕ сообщения)
        main_handler = self._rotating_handler("gosset.log", rotation_config)
        main_handler.setLevel(getattr(logging, self.config['file_level']))
        main_handler.setFormatter(CustomFormatter(self.config['formats']['detailed']))
        logger.addHandler(main_handler)

        # 2. Лог-файл для метрик (только METRIC JSON)
        metrics_handler = self._rotating_handler("metrics.log", rotation_config)
        metrics_handler.setLevel(logging.INFO)
        metrics_handler.addFilter(MetricsFilter())
        metrics_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(metrics_handler)

        # 3. Лог-файл для ошибок (WARNING и выше)
        error_handler = self._rotating_handler("errors.log", rotation_config)
        error_handler.setLevel(logging.WARNING)
        error_handler.setFormatter(CustomFormatter(
            '%(timestamp)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(error_handler)

    def _rotating_handler(self, filename: str, rotation_config: Dict) -> logging.Handler:
        return logging.handlers.TimedRotatingFileHandler(
            filename=self.log_dir / filename,
            when=rotation_config['when'],
            interval=rotation_config['interval'],
            backupCount=rotation_config['backup_count'],
            encoding='utf-8'
        )


# Глобальный экземпляр логгера
_gosset_logger = None


def setup_logging(config_path: Optional[str] = None, force: bool = False) -> GossetLogger:
    """
    Инициализирует систему логирования.

    Повторный вызов возвращает уже настроенный экземпляр, если не задан force
    """
    global _gosset_logger
    if _gosset_logger is None or force:
        _gosset_logger = GossetLogger(config_path=config_path)
    return _gosset_logger


def get_logger(name: str) -> logging.Logger:
    """Возвращает именованный логгер внутри иерархии gosset"""
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def log_metric(logger: logging.Logger, metric_name: str, value: float,
               context: Optional[Dict] = None):
    """Логирует метрику в структурированном JSON формате"""
    metric_data = {
        'metric': metric_name,
        'value': float(value),
        'timestamp': datetime.now().isoformat(),
        'context': context or {}
    }

    logger.info(f"METRIC {json.dumps(metric_data, ensure_ascii=False)}")
