"""EASA flight logbook PDF and airports map exporter."""

__version__ = '1.0.0'
