"""
Application Layer for the BUILD tracker engine.

This package contains:
- ports/: Abstract store interfaces (what the engine needs)
- use_cases/: Workflows for user-initiated writes
- exceptions.py: Error hierarchy shared by all layers
"""
