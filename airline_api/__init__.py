"""
Top‑level package for the Airline Booking API.

This file makes ``airline_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``airline_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
