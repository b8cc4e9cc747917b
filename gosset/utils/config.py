import copy
from pathlib import Path
from typing import Dict, Any

import yaml


DEFAULT_CONFIG = {
    'kendall': {
        'null_rm': True,
    },
    'logging': {
        'console_level': 'INFO',
        'file_level': 'DEBUG',
        'log_dir': None,
        'rotation': {
            'backup_count': 5,
            'when': 'D',
            'interval': 1,
        },
        'formats': {
            'detailed': '%(timestamp)s - %(name)-35s - %(levelname)-8s - %(message)s',
            'simple': '%(levelname)-8s %(message)s',
        }
    }
}


def deep_update(original: Dict, update: Dict) -> Dict:
    """Рекурсивно обновляет словарь конфигурации"""
    for key, value in update.items():
        if isinstance(value, dict) and key in original and isinstance(original[key], dict):
            original[key] = deep_update(original[key], value)
        else:
            original[key] = value
    return original


def load_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    """
    Загружает конфигурацию пакета

    Args:
        config_path: Путь к YAML-файлу. Если не указан, используются
            значения по умолчанию

    Returns:
        Словарь конфигурации: значения по умолчанию, поверх которых
        наложено содержимое файла
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path is None:
        return config

    with open(config_path, 'r', encoding='utf-8') as f:
        user_config = yaml.safe_load(f) or {}

    if not isinstance(user_config, dict):
        raise ValueError(f"Некорректный формат конфигурации: {config_path}")

    return deep_update(config, user_config)
