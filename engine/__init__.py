"""
BUILD tracker decision engine.

Rule-based evaluators that turn logged sets into training decisions:
load increases, regression warnings, deload suggestions, exercise unlocks
and equipment-transition readiness.
"""
