"""
API layer package.

This package contains the FastAPI dependencies, routers and error handlers
of the service.
"""
