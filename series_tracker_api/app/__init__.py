"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules, organised by concern: ``core`` (configuration, logging,
database, security, errors), ``schemas`` (request/response models),
``services`` (business rules) and ``api`` (routers).
"""

from .main import app  # noqa: F401
