"""
FastAPI routers grouped by domain (users, ship groups).

Each module exposes an APIRouter included by the main application (app.py).
"""
