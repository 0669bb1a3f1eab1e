# grocery_prices/config/logging_config.py

"""Per-run logging for grocery_prices reports.

Each report run writes one log file inside ``logs/``, named after the price
dataset being read and the launch time, e.g.
``logs/run_cleaned_data_20261018_153045.log``. Runs against different
datasets can then be told apart without opening the files. All
``grocery_prices.*`` loggers share the file handler, so the loader, the
aggregator and the chart builders end up in one log.
"""

import logging
import re
import sys
from datetime import datetime
from pathlib import Path

from grocery_prices.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | %(module)s:%(funcName)s:%(lineno)d | "
    "%(message)s"
)

_CONSOLE_FORMAT = "%(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def log_file_name(dataset: Path | str | None, started: datetime) -> str:
    """File name for a run over *dataset* launched at *started*.

    The dataset's file stem is reduced to filename-safe characters; without
    a dataset the name is just ``run_<timestamp>.log``.
    """
    stamp = started.strftime("%Y%m%d_%H%M%S")
    if dataset is None:
        return f"run_{stamp}.log"
    stem = _UNSAFE_CHARS.sub("_", Path(dataset).stem).strip("_")
    return f"run_{stem}_{stamp}.log" if stem else f"run_{stamp}.log"


def setup_logging(dataset: Path | str | None = None) -> Path:
    """Attach the run's file and console handlers to ``grocery_prices``.

    Returns the path of the log file for this run. When handlers are
    already attached (a second call in the same process) they are kept
    and nothing new is opened.
    """
    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / log_file_name(dataset, datetime.now())

    root_logger = logging.getLogger("grocery_prices")
    root_logger.setLevel(logging.DEBUG)

    if root_logger.handlers:
        return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    # Loader warnings (dropped rows, invalid prices) reach the terminal
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info(
        "Report log for dataset %s",
        dataset if dataset is not None else Settings.DATA_PATH,
    )
    return log_file
