"""Desktop GUI implementation built with PySide6/Qt.

A single main window hosts the scan and clear buttons over the status log
view. This layer owns the Qt event loop and the window lifecycle and
delegates scanning and logging to :mod:`hotcold.core`,
:mod:`hotcold.bluetooth` and :mod:`hotcold.dataio`.
"""
