"""
FastAPI routers grouped by resource (films, users).

Each module exposes an APIRouter included by ``filmorate.app.create_app``.
Routers only translate HTTP into service calls; business rules live in
``filmorate.services``.
"""
