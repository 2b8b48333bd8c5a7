"""
Rental requests.

Responsibilities:
- Record rental requests and compute their day count and total.
- Normalize stored statuses, including the Turkish UI labels.
- Let listing owners approve, reject or complete requests.
- Report which listings a viewer already has an active rental on.
"""
