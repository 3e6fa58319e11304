"""
Ampere Analyzer - Utilities Module
==================================
Logging and performance tracking helpers.
"""

from .logger import (
    AmpereAnalyzerLogger,
    AmpereAnalyzerFormatter,
    PerformanceTracker,
    get_logger,
    initialize_logger,
    log_function,
    timed_function,
    log_section,
    log_exception_handler,
    format_error_report,
)

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
]
