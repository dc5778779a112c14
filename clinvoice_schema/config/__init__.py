"""
Configuration module for the billing schema.
"""
from .logging_config import (
    JSONFormatter,
    LoggingConfig,
    configure_logging,
    get_logger,
    reset_logging,
    setup_logging,
)
from .settings import (
    ClinvoiceSettings,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'ClinvoiceSettings',
    'get_config',
    'load_config',
    'reload_config',
    'JSONFormatter',
    'LoggingConfig',
    'configure_logging',
    'get_logger',
    'reset_logging',
    'setup_logging',
]
