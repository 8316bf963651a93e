"""Crowdfund Application Package — campaigns, donations and the funding ledger.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
