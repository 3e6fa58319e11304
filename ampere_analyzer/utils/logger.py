"""
Ampere Analyzer - Logging System
================================
Console and optional file logging, run lifecycle messages and timing statistics.

The console shows warnings by default. A debug-level log file is written only
when a directory is given, either to initialize_logger() or through the
AMPERE_ANALYZER_LOG_DIR environment variable.

Author: Ampere Analyzer Tool
Version: 1.0.0
"""

import logging
import os
import sys
import time
import traceback
from collections import defaultdict
from datetime import datetime
from typing import Optional, Dict, Any, Callable, List
from functools import wraps
import threading
from contextlib import contextmanager

LOG_DIR_ENV = "AMPERE_ANALYZER_LOG_DIR"
LOGGER_NAME = "AmpereAnalyzer"
DEFAULT_LOG_DIR = os.path.join('~', '.ampere_analyzer', 'logs')

_RESET = '\033[0m'
_LEVEL_COLORS = {
    logging.DEBUG: '\033[36m',     # Cyan
    logging.INFO: '\033[32m',      # Green
    logging.WARNING: '\033[33m',   # Yellow
    logging.ERROR: '\033[31m',     # Red
    logging.CRITICAL: '\033[35m',  # Magenta
}


def _console_stream():
    """First usable standard stream; None lets StreamHandler pick stderr."""
    for name in ("stderr", "__stderr__", "stdout", "__stdout__"):
        stream = getattr(sys, name, None)
        if stream is not None:
            return stream
    return None


def _is_terminal(stream) -> bool:
    try:
        return bool(stream is not None and stream.isatty())
    except (AttributeError, ValueError):
        return False


class AmpereAnalyzerFormatter(logging.Formatter):
    """Single-line records: time, level, worker thread and source location."""

    def __init__(self, use_colors: bool = True, stream=None):
        super().__init__()
        if stream is None:
            stream = _console_stream()
        self.use_colors = use_colors and _is_terminal(stream)

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime('%H:%M:%S.%f')[:-3]
        level = f"{record.levelname:8s}"
        if self.use_colors:
            level = f"{_LEVEL_COLORS.get(record.levelno, '')}{level}{_RESET}"

        # Runs execute on named worker threads
        thread = "" if record.threadName in (None, 'MainThread') else f"[{record.threadName}]"
        text = (f"{stamp} {level} {thread}"
                f"[{record.module}.{record.funcName}:{record.lineno}] {record.getMessage()}")

        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return text


class PerformanceTracker:
    """Thread-safe wall-clock durations per named operation."""

    def __init__(self):
        self._durations: Dict[str, List[float]] = defaultdict(list)
        self._lock = threading.Lock()

    def record_timing(self, operation: str, duration_s: float):
        with self._lock:
            self._durations[operation].append(duration_s)

    def get_stats(self, operation: str) -> Dict[str, float]:
        """Count, total, mean, min and max seconds for one operation."""
        with self._lock:
            samples = list(self._durations.get(operation, ()))
        if not samples:
            return dict.fromkeys(('count', 'total', 'mean', 'min', 'max'), 0)
        total = sum(samples)
        return {
            'count': len(samples),
            'total': total,
            'mean': total / len(samples),
            'min': min(samples),
            'max': max(samples),
        }

    def get_all_stats(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            names = sorted(self._durations)
        return {name: self.get_stats(name) for name in names}

    def clear(self):
        with self._lock:
            self._durations.clear()


class AmpereAnalyzerLogger:
    """Process-wide logger shared by the engine, runners and CLI."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self,
                 log_dir: Optional[str] = None,
                 log_level: int = logging.DEBUG,
                 console_level: int = logging.WARNING,
                 enable_file_logging: Optional[bool] = None,
                 enable_performance_tracking: bool = True):
        if self._initialized:
            return
        self._initialized = True

        self.log_dir = log_dir or os.environ.get(LOG_DIR_ENV)
        self.log_level = log_level
        self.console_level = console_level
        self.enable_file_logging = bool(self.log_dir) if enable_file_logging is None else enable_file_logging
        self.current_log_file: Optional[str] = None

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(log_level)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)

        self._console = self._console_handler(console_level)
        self.logger.addHandler(self._console)
        if self.enable_file_logging:
            self.logger.addHandler(self._file_handler())
            self.debug(f"Logging to {self.current_log_file}")

        self.performance = PerformanceTracker() if enable_performance_tracking else None

    @staticmethod
    def _console_handler(level: int) -> logging.Handler:
        stream = _console_stream()
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)
        handler.setFormatter(AmpereAnalyzerFormatter(use_colors=True, stream=stream))
        return handler

    def _file_handler(self) -> logging.Handler:
        log_dir = os.path.expanduser(self.log_dir or DEFAULT_LOG_DIR)
        os.makedirs(log_dir, exist_ok=True)
        self.log_dir = log_dir

        path = os.path.join(log_dir, f"ampere_analyzer_{datetime.now():%Y%m%d_%H%M%S}.log")
        handler = logging.FileHandler(path, encoding='utf-8')
        handler.setLevel(self.log_level)
        handler.setFormatter(AmpereAnalyzerFormatter(use_colors=False))

        self.current_log_file = path
        return handler

    def set_log_level(self, level: int):
        self.logger.setLevel(level)
        self.log_level = level

    def set_console_level(self, level: int):
        self._console.setLevel(level)
        self.console_level = level

    def close(self):
        """Detach and close every handler."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

    def debug(self, message: str, *args, **kwargs):
        self.logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self.logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self.logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self.logger.error(message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs):
        self.logger.critical(message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        self.logger.exception(message, *args, **kwargs)

    # Several runs may be in flight, so the start time goes back to the
    # caller rather than being stored here.
    def log_run_start(self, run_id: str, params: Dict[str, Any]) -> float:
        """Log a run's parameters; returns its start time for log_run_end."""
        self.info(f"Run {run_id} started")
        for key, value in params.items():
            self.debug(f"  {run_id} {key} = {value}")
        return time.perf_counter()

    def log_run_end(self, run_id: str, started_at: float, status: str, message: str = ""):
        elapsed_ms = (time.perf_counter() - started_at) * 1000
        suffix = f": {message}" if message else ""
        self.info(f"Run {run_id} {status} in {elapsed_ms:.1f} ms{suffix}")

    def log_sample(self, current_a: float, temp_c: float, power_w: float, is_safe: bool):
        verdict = 'ok' if is_safe else 'FAIL'
        self.debug(f"I={current_a:.4f}A Tj={temp_c:.2f}°C P={power_w:.3f}W {verdict}")

    def log_bracket(self, iteration: int, low: float, high: float, tolerance: float):
        self.debug(f"Bisection {iteration}: [{low:.4f}, {high:.4f}]A "
                   f"width={high - low:.4f}A tol={tolerance:.4f}A")

    def log_performance_summary(self):
        if not self.performance:
            return
        for name, stats in self.performance.get_all_stats().items():
            self.info(f"{name}: {stats['count']} calls, {stats['total']:.4f}s total, "
                      f"{stats['mean'] * 1000:.2f} ms mean")


_logger: Optional[AmpereAnalyzerLogger] = None


def get_logger() -> AmpereAnalyzerLogger:
    """Shared logger, created on first use."""
    global _logger
    if _logger is None:
        _logger = AmpereAnalyzerLogger()
    return _logger


def initialize_logger(log_dir: Optional[str] = None,
                      log_level: int = logging.DEBUG,
                      console_level: int = logging.INFO,
                      enable_file_logging: bool = True) -> AmpereAnalyzerLogger:
    """Replace the shared logger, closing the previous one's handlers."""
    global _logger
    with AmpereAnalyzerLogger._lock:
        previous, AmpereAnalyzerLogger._instance = AmpereAnalyzerLogger._instance, None
    if previous is not None:
        previous.close()
    _logger = AmpereAnalyzerLogger(
        log_dir=log_dir,
        log_level=log_level,
        console_level=console_level,
        enable_file_logging=enable_file_logging,
    )
    return _logger


def log_function(level: int = logging.DEBUG):
    """Log entry to and exit from the decorated function."""
    def decorator(func: Callable):
        name = func.__qualname__

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            logger.logger.log(level, f"-> {name}")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"{name} raised {type(e).__name__}: {e}")
                raise
            logger.logger.log(level, f"<- {name}")
            return result
        return wrapper
    return decorator


def timed_function(operation_name: Optional[str] = None):
    """Record the decorated function's duration, successful or not."""
    def decorator(func: Callable):
        name = operation_name or func.__qualname__

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            started = time.perf_counter()
            failed = True
            try:
                result = func(*args, **kwargs)
                failed = False
                return result
            finally:
                duration = time.perf_counter() - started
                if logger.performance:
                    logger.performance.record_timing(name, duration)
                if failed:
                    logger.error(f"{name} failed after {duration * 1000:.2f} ms")
                else:
                    logger.debug(f"{name} took {duration * 1000:.2f} ms")
        return wrapper
    return decorator


@contextmanager
def log_section(section_name: str):
    """Log the start, duration and failure of a block."""
    logger = get_logger()
    logger.info(f"{section_name}...")
    started = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.error(f"{section_name} failed after {time.perf_counter() - started:.3f}s: {e}")
        raise
    logger.info(f"{section_name} done in {time.perf_counter() - started:.3f}s")


def log_exception_handler(func: Callable):
    """Log any exception escaping the decorated function at critical level, then re-raise."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception:
            get_logger().critical(f"Unhandled exception in {func.__qualname__}", exc_info=True)
            raise
    return wrapper


def format_error_report(error: BaseException, context: Optional[Dict[str, Any]] = None) -> str:
    """Multi-line report of an exception, its traceback and optional context."""
    rule = "=" * 60
    trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    lines = [
        rule,
        f"Error Type: {type(error).__name__}",
        f"Message:    {error}",
        rule,
        trace.rstrip(),
    ]
    if context:
        lines.append("Context:")
        lines.extend(f"  {key}: {value}" for key, value in context.items())
    lines.append(rule)
    return "\n".join(lines)


__all__ = [
    'AmpereAnalyzerLogger',
    'AmpereAnalyzerFormatter',
    'PerformanceTracker',
    'get_logger',
    'initialize_logger',
    'log_function',
    'timed_function',
    'log_section',
    'log_exception_handler',
    'format_error_report',
    'LOG_DIR_ENV',
]
