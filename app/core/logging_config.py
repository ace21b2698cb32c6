"""
Logging configuration for the API process.

JSON logs (python-json-logger) for deployed environments, plain text for
local development. Every JSON record is tagged with the service name and
environment so logs from several deployments can share one sink.
"""

import logging
import sys
from typing import Any, Dict
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

NOISY_LOGGERS = {
    "passlib": logging.ERROR,
    "sqlalchemy.engine": logging.WARNING,
    "uvicorn.access": logging.WARNING,
}


class ServiceJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that stamps records with service and source information.
    """

    def __init__(self, *args, service: str = "job-tracker-api", environment: str = "development", **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service
        self.environment = environment

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z')
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = self.service
        log_record['environment'] = self.environment

        # Source location only matters when something went wrong
        if record.levelno >= logging.WARNING:
            log_record['module'] = record.module
            log_record['function'] = record.funcName
            log_record['line'] = record.lineno


def setup_logging(
    log_level: str = "INFO",
    json_logs: bool = True,
    service: str = "job-tracker-api",
    environment: str = "development",
) -> None:
    """
    Route all logging to stdout with a single handler.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON output when True, human-readable lines otherwise
        service: Value of the ``service`` field on JSON records
        environment: Value of the ``environment`` field on JSON records
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        console_handler.setFormatter(ServiceJsonFormatter(
            '%(timestamp)s %(level)s %(logger)s %(message)s',
            service=service,
            environment=environment,
        ))
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    for name, level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(level)
