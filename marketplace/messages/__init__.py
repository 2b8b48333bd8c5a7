"""
Messages between renters and listing owners.

Responsibilities:
- Store messages about a listing, addressed to its owner.
- Notify owners when a rental request comes in.
- List a user's inbox and outbox, newest first.
"""
