"""palette_lut.core: Foundation layer.

Contains the error types, shared types, segment decoder, lookup table entity,
colormaps, settings and report builder. This module has NO dependencies on
palette_lut.commands or palette_lut.registry.
Only stdlib and numpy are allowed here.
"""
