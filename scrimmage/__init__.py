"""Scrimmage - outcome resolution core for an American football simulation."""

__version__ = "0.1.0"
