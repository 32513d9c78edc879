"""
Common utilities package for the sales reports application.

Only the logger is re-exported here: `app.config` imports it during startup,
so this package must not pull in modules that depend on settings.
"""

from app.utils.logger import setup_logger

__all__ = ["setup_logger"]
