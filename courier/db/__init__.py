"""Database Package — declarative Base shared by models and migrations.

Invariants:
    - Base (db/base.py) is imported by every model and by alembic/env.py
    - Request-scoped sessions come from infrastructure/database.py, not from here
"""
