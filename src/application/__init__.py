"""
Application layer - Assessment use cases and the ports they depend on.

IMPORT RULES:
- CAN import from: domain
- Ports are implemented in infrastructure and wired in bootstrap
"""
