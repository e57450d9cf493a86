"""
Adapters: Concrete implementations of ports.

This layer contains all external integrations:
- Signed HTTP transport
- Exchange adapters (Foxbit)
"""
