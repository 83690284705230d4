"""
Core utilities shared across the shiptrack API.

This package hosts configuration helpers (env vars, feature knobs), logging
setup and password hashing. Routers and services depend on these primitives
instead of reading os.environ or configuring loggers themselves.
"""
