"""Core settings and shared application primitives.

Configuration, request middleware and input validation used across the
controllers and services.
"""
