"""Services Layer — ledger writes, campaign lookups and server-side credentials.

Invariants:
    - Services own transaction boundaries; routes never commit ledger writes themselves
"""
