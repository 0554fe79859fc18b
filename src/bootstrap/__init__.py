"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so the application
layer depends on ports without importing infrastructure directly.
"""
