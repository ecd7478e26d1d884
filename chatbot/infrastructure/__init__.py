"""
Infrastructure package: document stores, repositories and the intent
classification engine.
"""
