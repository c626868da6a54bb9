"""
Centralized Configuration Module

All application constants, logging configuration, and settings.
Import from here instead of hardcoding values.
"""

import os
import logging
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from .models import Target

# ============================================================================
# Load default .env at module import time
# ============================================================================
# This ensures BmcConfig and other classes can access env vars immediately
load_dotenv()

# ============================================================================
# Environment Loading
# ============================================================================

def load_environment(env_file: Optional[str] = None):
    """
    Load environment variables from .env file.

    Args:
        env_file: Optional path to .env file. If None, uses default .env
    """
    if env_file:
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path, override=True)
            logging.getLogger(__name__).info(f"Loaded environment from: {env_file}")
        else:
            logging.getLogger(__name__).warning(f"Environment file not found: {env_file}")
    else:
        # Reload default .env
        load_dotenv(override=True)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ============================================================================
# Application Constants
# ============================================================================

class AppConfig:
    """Application-wide configuration constants"""

    # Application Info
    APP_NAME = "BMC Inventory"
    APP_VERSION = "1.0.0"
    APP_DESCRIPTION = "Collect a normalized hardware snapshot from vendor BMCs"

    # Timeouts (seconds, applied to every HTTP call)
    API_TIMEOUT = int(os.getenv("API_TIMEOUT", "30"))

    # Log in again before every call instead of reusing the session
    RELOGIN_EACH_CALL = _env_flag("RELOGIN_EACH_CALL")

    # Default Values
    DEFAULT_OUTPUT_FORMAT = "list"


class BmcConfig:
    """Target BMC configuration"""

    SUPPORTED_TYPES = ("supermicrox", "c7000")

    HOST = os.getenv("BMC_HOST")
    USERNAME = os.getenv("BMC_USERNAME")
    PASSWORD = os.getenv("BMC_PASSWORD")
    TYPE = os.getenv("BMC_TYPE", "supermicrox").lower()

    # TLS
    SECURE_TLS = _env_flag("BMC_SECURE_TLS")
    CA_BUNDLE = os.getenv("BMC_CA_BUNDLE")

    @classmethod
    def reload(cls):
        """Re-read class attributes after load_environment()"""
        cls.HOST = os.getenv("BMC_HOST")
        cls.USERNAME = os.getenv("BMC_USERNAME")
        cls.PASSWORD = os.getenv("BMC_PASSWORD")
        cls.TYPE = os.getenv("BMC_TYPE", "supermicrox").lower()
        cls.SECURE_TLS = _env_flag("BMC_SECURE_TLS")
        cls.CA_BUNDLE = os.getenv("BMC_CA_BUNDLE")

    @classmethod
    def is_configured(cls) -> bool:
        """Check if a target is fully configured"""
        return all([cls.HOST, cls.USERNAME, cls.PASSWORD])

    @classmethod
    def get_target(cls) -> Target:
        """Build the Target described by the environment"""
        return Target(
            host=cls.HOST,
            username=cls.USERNAME or "",
            password=cls.PASSWORD or "",
            secure_tls=cls.SECURE_TLS,
            ca_bundle=cls.CA_BUNDLE,
        )


# ============================================================================
# Logging Configuration
# ============================================================================

class LogConfig:
    """Logging configuration"""

    # Log Level
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # Log Format
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

    # Detailed format with file/line
    DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"

    # File Logging
    LOG_FILE = os.getenv("LOG_FILE")  # Optional
    LOG_FILE_MAX_BYTES = int(os.getenv("LOG_FILE_MAX_BYTES", "10485760"))  # 10MB
    LOG_FILE_BACKUP_COUNT = int(os.getenv("LOG_FILE_BACKUP_COUNT", "5"))


def setup_logging(verbose: bool = False, log_file: Optional[str] = None):
    """
    Configure application logging.

    Args:
        verbose: Enable verbose (DEBUG) logging, including wire traces
        log_file: Optional log file path
    """
    # Determine log level
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, LogConfig.LOG_LEVEL, logging.INFO)

    # Choose format
    log_format = LogConfig.DETAILED_FORMAT if verbose else LogConfig.LOG_FORMAT

    # Configure root logger
    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=LogConfig.LOG_DATE_FORMAT
    )

    # Add file handler if specified
    if log_file or LogConfig.LOG_FILE:
        from logging.handlers import RotatingFileHandler

        file_path = log_file or LogConfig.LOG_FILE
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=LogConfig.LOG_FILE_MAX_BYTES,
            backupCount=LogConfig.LOG_FILE_BACKUP_COUNT
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(log_format, LogConfig.LOG_DATE_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info(f"Logging to file: {file_path}")

    # Suppress noisy loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger.info(f"Logging configured: level={logging.getLevelName(log_level)}")


# Initialize logger for this module
logger = logging.getLogger(__name__)


# ============================================================================
# Validation
# ============================================================================

def validate_config():
    """
    Validate configuration on startup.
    Raises ValueError if critical configuration is missing.
    """
    errors = []

    if not BmcConfig.HOST:
        errors.append("BMC_HOST is not set")
    if not all([BmcConfig.USERNAME, BmcConfig.PASSWORD]):
        errors.append("BMC username/password missing (BMC_USERNAME, BMC_PASSWORD)")

    if BmcConfig.TYPE not in BmcConfig.SUPPORTED_TYPES:
        errors.append(f"Unknown BMC_TYPE '{BmcConfig.TYPE}' (supported: {', '.join(BmcConfig.SUPPORTED_TYPES)})")

    if BmcConfig.CA_BUNDLE:
        if not BmcConfig.SECURE_TLS:
            errors.append("BMC_CA_BUNDLE set but BMC_SECURE_TLS is disabled")
        elif not Path(BmcConfig.CA_BUNDLE).is_file():
            errors.append(f"BMC_CA_BUNDLE not found: {BmcConfig.CA_BUNDLE}")

    if AppConfig.API_TIMEOUT <= 0:
        errors.append(f"API_TIMEOUT must be positive, got {AppConfig.API_TIMEOUT}")

    # Raise errors if any
    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)

    logger.info(f"Configuration validated: {BmcConfig.TYPE} target {BmcConfig.HOST}")


# ============================================================================
# Export commonly used configs
# ============================================================================

# Load environment on module import
load_environment()

# Export for convenience
__all__ = [
    'AppConfig',
    'BmcConfig',
    'LogConfig',
    'load_environment',
    'setup_logging',
    'validate_config',
]
