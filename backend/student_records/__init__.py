"""Application package for the student records backend.

This package exposes the service, repository, validation and model
modules used by the FastAPI application. It is intentionally
lightweight; individual modules contain the concrete implementations
and documentation.
"""
