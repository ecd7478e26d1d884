"""
Intent chat service.

Stores intent training records in a document store and answers chat
messages by classifying them against a classifier rebuilt from those
records on every request.
"""

__version__ = "0.1.0"
