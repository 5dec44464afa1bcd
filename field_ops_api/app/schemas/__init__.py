"""
Pydantic schema definitions for API payloads.

Each resource defines a ``*Create`` model for POST bodies, a
``*Update`` model (all fields optional) for PUT bodies and a ``*Read``
model for responses.  ``common`` holds the paginated list envelope.
"""
