"""
Rentomatic Backend - Use Cases
===============================

Single-operation business logic, operating only through the repository
interface and returning Response envelopes.

Inventory:
    - room_list_use_case: list rooms matching a validated filter set
"""

from rentomatic.use_cases.room_list import room_list_use_case

__all__ = ["room_list_use_case"]
