"""
Persistence adapters.

Each repository class wraps the SQLAlchemy session for one aggregate
(accounts, ship groups, reports). Services depend on these classes rather
than issuing queries themselves.
"""
