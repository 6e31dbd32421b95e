"""
Logging Setup — JSON-логирование для арифметического слоя

Модули пакета пишут в логгеры вида logging.getLogger(__name__) и ничего не
выводят, пока хост не настроит logging. configure_logging() — опциональная
утилита: ставит JSON-форматтер на корневой логгер пакета "src".
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, TextIO

# Имя корневого логгера пакета
PACKAGE_LOGGER_NAME = "src"

# Атрибуты LogRecord, которые не попадают в payload как extra-поля
_RESERVED_RECORD_KEYS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Сериализация LogRecord в одну JSON-строку."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # extra={...} из вызова логгера
        for key, value in record.__dict__.items():
            if key.startswith("_") or key in _RESERVED_RECORD_KEYS or key in payload:
                continue
            try:
                json.dumps({key: value})
            except TypeError:
                value = repr(value)
            payload[key] = value

        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    *,
    level: str = "INFO",
    stream: TextIO | None = None,
    logger_name: str = PACKAGE_LOGGER_NAME,
) -> logging.Logger:
    """
    Настройка JSON-логирования для логгера пакета.

    Args:
        level: Уровень логирования ("DEBUG", "INFO", ...)
        stream: Поток вывода (по умолчанию sys.stderr)
        logger_name: Имя настраиваемого логгера

    Returns:
        Настроенный логгер
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())

    logger = logging.getLogger(logger_name)
    logger.setLevel(level.upper())
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("JSON logging configured", extra={"level_name": level.upper()})
    return logger


__all__ = ["PACKAGE_LOGGER_NAME", "JsonFormatter", "configure_logging"]
