"""
Listing search layer.

Responsibilities:
- Fold free text into a comparable form (Turkish letters, punctuation).
- Measure token similarity with Levenshtein distance.
- Filter the catalog by tags and rank it against a free-text query.
- Order the catalog by popularity for the home page strip.
"""
