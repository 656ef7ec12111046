"""Core — pure domain logic: types, errors, date handling, log filtering, store protocols.

Invariants:
    - No IO, no framework imports (FastAPI, SQLAlchemy) anywhere in this package
"""
