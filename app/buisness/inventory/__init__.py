"""
Inventory business layer.

Organized into:
- status/ - unit status transitions (Available/Reserved/Sold)
- stock/  - roll intake, inspection and division
"""
