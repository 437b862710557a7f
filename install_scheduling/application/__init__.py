"""
Application layer package.

This package contains use cases, services, and interfaces that implement
the scheduling logic of the application.
"""
