"""
API routers package.

Health checks, training data management and message classification.
"""
