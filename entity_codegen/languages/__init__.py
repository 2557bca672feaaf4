"""
Target-specific code generators.

This module contains generators for different persistence frameworks.
"""

from .typeorm import TypeORMGenerator, create_typeorm_generator

__all__ = ["TypeORMGenerator", "create_typeorm_generator"]
