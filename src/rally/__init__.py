"""Volleyball team draws: roster, balanced random teams and draw history."""

__version__ = "0.1.0"
