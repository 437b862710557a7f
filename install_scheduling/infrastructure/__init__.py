"""
Infrastructure package.

Database models and repositories, distance providers, external HTTP
helpers and monitoring.
"""
