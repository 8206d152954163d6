"""Services Layer — request gate and task router.

Invariants:
    - The gate is the only caller of the router
    - The router talks to the store only through the TaskStore protocol
"""
