"""Logging configuration tests"""
import pytest

import logging

from sdf_dom.logging_config import setup_logging
from sdf_dom.root import Root

__all__ = ['TestSetupLogging']

class TestSetupLogging():
    @pytest.fixture(autouse=True)
    def restore(self):
        logger = logging.getLogger('sdf_dom')
        level, handlers = logger.level, list(logger.handlers)
        yield
        for handler in logger.handlers:
            handler.close()
        logger.handlers[:] = handlers
        logger.setLevel(level)

    def test_console_handler(self):
        logger = setup_logging(logging.DEBUG)

        assert logger.name == 'sdf_dom'
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_repeated_setup(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / 'sdf_dom.log'
        logger = setup_logging(logging.INFO, str(log_file))
        assert len(logger.handlers) == 2

        Root().load_string('<sdf version="1.7"><model name="m"><link name="l"/></model></sdf>')
        for handler in logger.handlers:
            handler.flush()

        assert 'Loaded [<string>]' in log_file.read_text(encoding='utf-8')
