"""
Related-listings engine.

Responsibilities:
- Track the viewer's recently viewed listings in their session.
- Resolve history ids against the catalog snapshot.
- Score the rest of the catalog against the listing on screen.
- Exclude the viewer's own listings and items they already rent.
"""
