"""Gestational age conversion and prenatal exam scheduling.

This package contains the calendar arithmetic and the domain models,
kept apart from storage and rendering, which live under ``adapters``.
"""
