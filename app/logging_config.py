from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def _formatter() -> JsonFormatter:
    return JsonFormatter(datefmt="%Y-%m-%d %H:%M:%S")


def _file_handler(path: Path, level: int) -> RotatingFileHandler:
    fh = RotatingFileHandler(path, maxBytes=2_000_000, backupCount=5, encoding="utf-8")
    fh.setFormatter(_formatter())
    fh.setLevel(level)
    return fh


def setup_logging(level: Union[int, str] = logging.INFO, logs_dir: Optional[Path] = None) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)
    if root.handlers:
        return

    console = logging.StreamHandler()
    console.setFormatter(_formatter())
    root.addHandler(console)

    if logs_dir is None:
        return

    logs_dir.mkdir(parents=True, exist_ok=True)
    root.addHandler(_file_handler(logs_dir / "app.log", logging.INFO))
    root.addHandler(_file_handler(logs_dir / "errors.log", logging.ERROR))

    sales_logger = logging.getLogger("sales_tracker.sales")
    sales_logger.addHandler(_file_handler(logs_dir / "sales.log", logging.INFO))
    sales_logger.setLevel(logging.INFO)
