"""
Accounts module - administrative accounts and caller identity.

This module handles:
- Account entity (admin and superadmin users)
- Bearer credential verification
- Role gate for administrative operations
- Admin management use cases
"""
