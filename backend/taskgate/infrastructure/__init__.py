"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/
    - All external calls wrapped with timeout/error mapping

Design Decisions:
    - Result-returning wrappers over raw clients (ADR: ExMA single responsibility)
"""
