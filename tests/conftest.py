"""Shared fixtures for mockstage core tests."""

import pytest

from mockstage.qt import QtCore
from mockstage.core.model import FramePayload, Layer, OverlayKind, OverlayPayload, Position
from mockstage.core.store import ProjectStore


@pytest.fixture(scope="session")
def qapp():
    """A QCoreApplication so QTimer and queued signals have an event loop."""
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def make_layer(name="Layer", kind="frame", **fields):
    payload = FramePayload() if kind == "frame" else OverlayPayload(kind=OverlayKind.TEXT, content=name)
    if "position" in fields:
        fields["position"] = Position.coerce(fields["position"])
    return Layer(payload=payload, name=name, **fields)


@pytest.fixture
def store(qapp):
    return ProjectStore()


@pytest.fixture
def stacked_store(store):
    """Three layers A, B, C with z_index 1, 2, 3 (C on top)."""
    for z, name in enumerate(("A", "B", "C"), start=1):
        store.add_layer(make_layer(name, kind="frame" if z != 2 else "overlay", z_index=z), select=False)
    return store


def by_name(store, name):
    return next(l for l in store.layers() if l.name == name)
