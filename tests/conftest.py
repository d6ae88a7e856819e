import pytest
from PySide6.QtCore import QCoreApplication

from movcpu.cpu_core import Simulator


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """QTimer and signal delivery want a core application object."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture
def sim():
    return Simulator()
