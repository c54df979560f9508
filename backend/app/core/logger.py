import logging
import os
from logging.handlers import RotatingFileHandler
from app.core.config import settings

# Third-party loggers that would otherwise log every Overpass round trip
NOISY_LOGGERS = ("httpx", "httpcore")

class LoggerConfig:
    """
    Logger for the backend: console plus a rotating file under log_directory.
    """
    def __init__(
        self, env=20, logger_name="ProximityFood", log_directory="logs", log_file="app.log"
    ):
        try:
            self.logger_name = logger_name
            self.log_directory = os.path.abspath(log_directory) if log_directory else None
            self.log_file_path = os.path.join(self.log_directory, log_file) if log_directory else None
            self.env = env
            self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

            self.logger = logging.getLogger(self.logger_name)
            self.setup_logger()
        except Exception as e:
            print(f"Failed to initialize logger: {str(e)}")

    def setup_logger(self):
        try:
            formatter = logging.Formatter(self.log_format)
            handlers = [logging.StreamHandler()]

            if self.log_directory:
                os.makedirs(self.log_directory, exist_ok=True)
                handlers.append(RotatingFileHandler(
                    self.log_file_path, backupCount=5, maxBytes=1024 * 1024 * 10, encoding="utf-8"
                ))

            # Avoid adding duplicate handlers under uvicorn --reload
            if not self.logger.handlers:
                for handler in handlers:
                    handler.setLevel(self.env)
                    handler.setFormatter(formatter)
                    self.logger.addHandler(handler)

            self.logger.setLevel(self.env)
            self.logger.propagate = False

            for name in NOISY_LOGGERS:
                logging.getLogger(name).setLevel(max(self.env, logging.WARNING))

        except Exception as e:
            print(f"Failed to setup logger handlers: {str(e)}")

    def log(self, level: int, message: str, extra: dict = None):
        """Simple wrapper to log messages"""
        if extra:
            message = f"{message} | {extra}"
        self.logger.log(level, message)

# Initialize Logger
logs = LoggerConfig(
    env=settings.LOGGER,
    logger_name="PROXIMITY-FOOD-BE",
    log_directory=settings.LOG_DIRECTORY,
    log_file=settings.LOG_FILE
)
