"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks that features use (DB wiring, settings,
logging). Keep feature-specific SQL in the corresponding feature package
(e.g. `posts/`).
"""
