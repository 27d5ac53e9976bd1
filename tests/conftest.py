import os
import sys
import logging
import logging.handlers
import pytest

# Ensure src directory is importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(__file__))
SRC_DIR = os.path.join(PROJECT_ROOT, 'src')
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication

from common.config import Config


@pytest.fixture(scope="session")
def qapp():
    """Create a Qt application instance for QObject/Signal tests."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    return app


@pytest.fixture
def config():
    """In-memory Config with built-in defaults (never touches disk)."""
    return Config()


@pytest.fixture
def config_file(tmp_path):
    """
    Factory fixture writing an ini file and returning its path.

    Usage:
        path = config_file("[Scrubber]\\nseconds_per_turn = 6.0\\n")
    """
    def _write(content: str, name: str = "config.ini") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def restore_root_logger():
    """Stop async logging and drop its queue handler after logging tests."""
    root = logging.getLogger()
    level = root.level
    yield root
    from common.utils.async_logging import shutdown_async_logging

    shutdown_async_logging()
    for handler in list(root.handlers):
        if isinstance(handler, logging.handlers.QueueHandler):
            root.removeHandler(handler)
    root.setLevel(level)
