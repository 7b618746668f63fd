"""
Licenses module - License management.

This module handles:
- License entity and domain logic
- License key generation
- License lifecycle (generate, activate, toggle, re-date, renew)
- License validation and verification
"""
