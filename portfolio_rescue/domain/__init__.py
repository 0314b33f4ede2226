"""Domain layer (pure logic).

- Keep game rules and return calculations here.
- Avoid I/O: no DB sessions, no HTTP/FastAPI.
- Randomness is passed in as a numpy Generator so rounds can be replayed.
"""
