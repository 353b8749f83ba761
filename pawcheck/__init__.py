"""Paw-Check: pavement temperature advisory for walking dogs."""

__version__ = "1.0.0"
