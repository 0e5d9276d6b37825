"""
gui - PySide6 Front End for the Episode Renamer
"""

from .gui_entry import main

__all__ = ["main"]
