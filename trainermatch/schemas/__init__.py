"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: SQLAlchemy tables (trainermatch.models)
- Schemas: API contract (what client sends/receives)
"""
