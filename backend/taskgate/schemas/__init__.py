"""Pydantic Schemas — request validation for the mutating task operations.

Invariants:
    - Schemas validate at system boundary (request bodies)
    - Domain types from core/ used to tag each schema with its operation
"""
