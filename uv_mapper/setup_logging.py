import logging
import sys
from pathlib import Path
from typing import Optional, Union


def setup_logging(level: int = logging.INFO, log_file: Optional[Union[str, Path]] = None):
    """
    Настраивает глобальный логгер для приложения.
    - Устанавливает формат сообщений.
    - Выводит логи в консоль (stdout).
    - Если задан log_file, дублирует логи в файл.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, mode="w", encoding="utf-8"))

    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,  # убирает старые хендлеры, чтобы не было дублей
    )

    # детальные логи только нашего пакета, остальное приглушим
    logging.getLogger("uv_mapper").setLevel(level)
    logging.getLogger("numba").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)
