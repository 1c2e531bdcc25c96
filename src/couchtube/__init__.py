"""Couchtube: channels of YouTube clips backed by SQLite."""

from importlib.metadata import version

__version__ = version("couchtube")
