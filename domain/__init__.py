"""
Domain layer for the BUILD tracker engine.

Pure training records with no storage or CLI dependencies.
"""
