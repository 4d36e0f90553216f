"""
Application Interfaces
"""

from .reclaimer import IReclaimer

__all__ = ["IReclaimer"]
