"""Core utilities and shared primitives.

Modules in this package are framework-agnostic where possible and focused
on configuration, ordering helpers, and HTTP error context.
"""
