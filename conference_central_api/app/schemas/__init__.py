"""
Pydantic schema definitions for API payloads.

Forms describe what clients send, ``*Read`` models describe what the
API returns.  Schemas are separated from datastore entities to
decouple API representation from persistence.
"""
