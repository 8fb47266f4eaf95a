"""Persona Engine: persona-conditioned replies and appointment extraction."""

__version__ = "1.0.0"
