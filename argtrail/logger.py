# Argtrail Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Argtrail."""
import logging

logger: logging.Logger = logging.getLogger("argtrail")
