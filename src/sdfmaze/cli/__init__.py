"""Command-line interface for sdfmaze.

This module provides the ``sdfmaze`` tool: formatting and validation of SDF
files, and generation of maze worlds for the Gazebo simulator.
"""

from .main import main

__all__ = ["main"]
