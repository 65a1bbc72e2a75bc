"""
Structured logging for SkillMatch.

Console and daily file output, plus counters for the data fetches that feed
the matcher and for the scoring work done on top of them.
"""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class StructuredLogger:
    """
    Named logger with console/file handlers and fetch/scoring metrics.
    """

    def __init__(
        self,
        name: str = "skillmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.handlers.clear()

        self.metrics = {
            "fetches_attempted": 0,
            "fetches_failed": 0,
            "jobs_scored": 0,
            "recommendations_served": 0,
            "errors_by_type": {},
            "source_success_rate": {},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(self.logger.level)
            console_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"skillmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            ))
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        self._log(logging.ERROR, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    def close(self):
        """Detach and close handlers so log files are released."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

    # Metrics

    def record_fetch_attempt(self, collection: str):
        """Record a fetch of one input collection (jobs, user-skills)."""
        self.metrics["fetches_attempted"] += 1
        stats = self.metrics["source_success_rate"].setdefault(
            collection, {"attempts": 0, "successes": 0}
        )
        stats["attempts"] += 1

    def record_fetch_success(self, collection: str):
        stats = self.metrics["source_success_rate"].get(collection)
        if stats is not None:
            stats["successes"] += 1

    def record_fetch_failure(self, collection: str, error_type: str):
        self.metrics["fetches_failed"] += 1
        errors = self.metrics["errors_by_type"]
        errors[error_type] = errors.get(error_type, 0) + 1

    def record_scoring(self, jobs_scored: int, recommendations: int):
        self.metrics["jobs_scored"] += jobs_scored
        self.metrics["recommendations_served"] += recommendations

    def get_metrics(self) -> dict:
        """Return current metrics with per-collection success rates filled in."""
        metrics_copy = self.metrics.copy()
        for stats in metrics_copy["source_success_rate"].values():
            if stats["attempts"] > 0:
                stats["success_rate"] = round(stats["successes"] / stats["attempts"], 3)
        return metrics_copy

    def log_metrics_summary(self):
        metrics = self.get_metrics()
        attempts = metrics["fetches_attempted"]
        failed = metrics["fetches_failed"]

        self.info("=== Recommendation Session Metrics ===")
        self.info(f"Fetches: {attempts - failed}/{attempts} succeeded")
        self.info(f"Jobs scored: {metrics['jobs_scored']}, recommendations served: {metrics['recommendations_served']}")

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "skillmatch",
    level: str = "INFO",
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Arguments only take effect on the call that creates the instance.
    """
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Drop the global logger (tests and CLI reconfiguration)."""
    global _global_logger
    if _global_logger is not None:
        _global_logger.close()
    _global_logger = None
