"""Domain layer (pure logic).

- Keep game rules and calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Prefer deterministic functions (dice faces are passed in as arguments).
"""
