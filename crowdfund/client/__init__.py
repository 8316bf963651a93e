"""Client Layer — the signed-in session as seen from a client process.

Invariants:
    - One SessionGateway per client process, passed explicitly to callers (no global)
    - The transport never caches a credential; the gateway attaches it per call
"""
