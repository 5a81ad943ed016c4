"""
Inventory Kernel

Pure domain types, typed errors, structured logging and the storage
translation layer for inventory line items:
- Immutable line items with process-local ids
- Tagged group keys (real vs. call-scoped synthetic)
- Sync plans mapping an edited list onto insert/update/delete
"""

__version__ = "0.1.0"
