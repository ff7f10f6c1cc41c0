"""Logging utilities for export operations"""
import logging
from typing import List


class ExportLogger:
    """Logger for export operations that also keeps messages in memory"""

    def __init__(self, job_id: str):
        self.job_id = job_id
        self.logs: List[str] = []
        self.errors: List[str] = []
        self.warnings: List[str] = []

        # Handlers come from the root logger configured by the caller
        self.logger = logging.getLogger(f"export.{job_id}")

    def info(self, message: str):
        """Log info message"""
        self.logs.append(f"INFO: {message}")
        self.logger.info(message)

    def error(self, message: str):
        """Log error message"""
        log_msg = f"ERROR: {message}"
        self.errors.append(log_msg)
        self.logs.append(log_msg)
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message"""
        log_msg = f"WARNING: {message}"
        self.warnings.append(log_msg)
        self.logs.append(log_msg)
        self.logger.warning(message)

    def success(self, message: str):
        """Log success message"""
        self.logs.append(f"SUCCESS: {message}")
        self.logger.info(f"✓ {message}")

    def get_errors(self) -> List[str]:
        """Get all errors"""
        return self.errors

    def get_warnings(self) -> List[str]:
        """Get all warnings"""
        return self.warnings


def configure_logging(verbose: bool = False):
    """Send log records to stderr so stdout only carries the exported document"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
