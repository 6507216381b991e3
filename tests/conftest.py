# Qt must run headless before any QApplication gets created by pytest-qt.
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from dock_state import DockItem


@pytest.fixture
def items():
    return [
        DockItem("Profile", "user-identity"),
        DockItem("Messages", "mail-message-new"),
        DockItem("Phone", "call-start"),
        DockItem("Camera", "camera-photo"),
        DockItem("Gallery", "image-x-generic"),
    ]
