"""
Interfaces of the external collaborators the domain depends on.
"""
