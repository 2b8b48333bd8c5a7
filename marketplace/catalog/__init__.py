"""
Catalog layer.

Responsibilities:
- Define the Listing record consumed by search and recommendations.
- Sanitize loosely-typed catalog rows once, at the boundary.
- Load the catalog snapshot from a CSV file or the remote products table.
- Keep the snapshot in memory, count listing views and apply owner edits.
- Write new listings, deletions and view counts back to the remote table.
"""
