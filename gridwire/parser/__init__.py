"""Recursive-descent parser producing validated gridwire documents."""

from .lib import parse

__all__ = ["parse"]
