"""
Output modules for chick
"""

from .console import ConsoleOutput

__all__ = ['ConsoleOutput']
