"""
HTTP layer for the energy proxy.

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- None
"""
