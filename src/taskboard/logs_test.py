import logging

from taskboard.logs import LOG_FORMAT, configure_logging


class TestConfigureLogging:
    """Tests for configure_logging()"""

    def test_installs_one_handler(self):
        logger = configure_logging("DEBUG")
        before = list(logger.handlers)

        configure_logging("INFO")

        assert logger.handlers == before
        assert logger.level == logging.INFO

    def test_handler_uses_package_format(self):
        logger = configure_logging()

        formats = [h.formatter._fmt for h in logger.handlers if h.formatter]
        assert LOG_FORMAT in formats

    def test_reinstalls_after_removal(self):
        logger = configure_logging()
        handler = next(h for h in logger.handlers if h.formatter and h.formatter._fmt == LOG_FORMAT)
        logger.removeHandler(handler)

        configure_logging()

        assert handler in logger.handlers
