"""
Unit tests for the logging utilities.
"""

import logging
import pytest

from ampere_analyzer.utils.logger import (
    AmpereAnalyzerFormatter,
    PerformanceTracker,
    format_error_report,
    get_logger,
    initialize_logger,
    log_section,
    timed_function,
)


@pytest.fixture
def quiet_logger():
    """Fresh console-only logger, restored afterwards."""
    logger = initialize_logger(console_level=logging.WARNING, enable_file_logging=False)
    yield logger
    initialize_logger(console_level=logging.WARNING, enable_file_logging=False)


class TestPerformanceTracker:

    def test_stats(self):
        tracker = PerformanceTracker()
        tracker.record_timing('search', 1.0)
        tracker.record_timing('search', 3.0)

        stats = tracker.get_stats('search')
        assert stats['count'] == 2
        assert stats['mean'] == pytest.approx(2.0)
        assert stats['max'] == 3.0

    def test_empty(self):
        assert PerformanceTracker().get_stats('missing')['count'] == 0


class TestLogger:

    def test_singleton(self, quiet_logger):
        assert get_logger() is quiet_logger

    def test_timed_function_records(self, quiet_logger):
        @timed_function("unit_op")
        def work():
            return 42

        assert work() == 42
        assert quiet_logger.performance.get_stats('unit_op')['count'] == 1

    def test_timed_function_reraises(self, quiet_logger):
        @timed_function()
        def broken():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            broken()

    def test_log_section_reraises(self, quiet_logger):
        with pytest.raises(KeyError):
            with log_section("failing section"):
                raise KeyError("missing")

    def test_run_lifecycle(self, quiet_logger):
        started = quiet_logger.log_run_start('run-1', {'max_current': 10.0})
        assert started > 0
        quiet_logger.log_run_end('run-1', started, 'safe', 'done')

    def test_file_logging(self, tmp_path, quiet_logger):
        logger = initialize_logger(log_dir=str(tmp_path), console_level=logging.WARNING)
        logger.info("written to file")
        logger.close()

        log_files = list(tmp_path.glob('ampere_analyzer_*.log'))
        assert len(log_files) == 1
        assert "written to file" in log_files[0].read_text(encoding='utf-8')


class TestFormatting:

    def test_thread_name_included(self):
        formatter = AmpereAnalyzerFormatter(use_colors=False)
        record = logging.LogRecord('AmpereAnalyzer', logging.INFO, __file__, 10,
                                   'hello', None, None, func='test')
        record.threadName = 'ampere-run-1234'

        assert '[ampere-run-1234]' in formatter.format(record)
        assert 'hello' in formatter.format(record)

    def test_error_report(self):
        try:
            raise RuntimeError("bad run")
        except RuntimeError as e:
            report = format_error_report(e, {'run_id': 'abc'})

        assert "Error Type: RuntimeError" in report
        assert "run_id: abc" in report
