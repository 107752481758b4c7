# mockstage/qt.py
from PySide6 import QtCore, QtGui, QtWidgets

Signal = QtCore.Signal
Slot = QtCore.Slot
QObject = QtCore.QObject

__all__ = ["QtCore", "QtGui", "QtWidgets", "Signal", "Slot", "QObject"]
