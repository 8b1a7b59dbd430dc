"""
Resume Templates Package

Contains all available resume templates.
"""

from .modern import ModernTemplate
from .classic import ClassicTemplate
from .minimal import MinimalTemplate

__all__ = [
    "ModernTemplate",
    "ClassicTemplate",
    "MinimalTemplate",
]
