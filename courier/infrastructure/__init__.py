"""Infrastructure Layer — database, repositories and external service clients.

Invariants:
    - Infrastructure implements the Protocols declared in core/repository_protocols.py
    - All external calls wrapped with timeout/error mapping

Design Decisions:
    - Thin adapters over SQLAlchemy and httpx (ADR: single responsibility)
"""
