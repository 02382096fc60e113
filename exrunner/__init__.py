"""Compile, run and track progress through a course of small exercises."""

__version__ = "4.5.0"
__all__ = ["__version__"]