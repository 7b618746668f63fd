"""
Notifications module - best-effort records of state-changing actions.
"""
