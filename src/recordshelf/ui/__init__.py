"""
User interface modules for Recordshelf.
"""

from .cli import RecordshelfCLI
from .display import DisplayManager

__all__ = ['RecordshelfCLI', 'DisplayManager']
