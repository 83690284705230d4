"""
High-level use cases for the shiptrack API.

Each service module orchestrates repositories/adapters to implement business
rules (signup, login, password change, ship group lifecycle, reports).
Routers (FastAPI endpoints) call these services instead of touching the
database or sessions directly.
"""
