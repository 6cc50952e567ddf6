"""CLI package.

The ``cli`` sub-package contains the Click application for linting
signalsets from the command line.
"""
from __future__ import annotations
