# File: src/chainview/monitoring/logging_config.py

import logging
import logging.handlers
import os
from datetime import datetime

class LogConfig:
    def __init__(
        self,
        log_dir: str = "logs",
        level: str = "INFO",
        max_size: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5
    ):
        self.log_dir = log_dir
        self.level = logging.getLevelName(level.upper()) if isinstance(level, str) else level
        self.max_size = max_size
        self.backup_count = backup_count

        os.makedirs(log_dir, exist_ok=True)

    def setup_logging(self) -> logging.Logger:
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        console_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(message)s'
        )

        log_file = os.path.join(
            self.log_dir,
            f'chainview_{datetime.now().strftime("%Y%m%d")}.log'
        )
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self.max_size,
            backupCount=self.backup_count
        )
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(self.level)

        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        # Module loggers created before setup carry their own handler
        for name in list(logging.root.manager.loggerDict):
            if name.startswith("chainview"):
                logger = logging.getLogger(name)
                for handler in list(logger.handlers):
                    logger.removeHandler(handler)
                logger.setLevel(logging.NOTSET)

        return root_logger
