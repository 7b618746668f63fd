"""
Model registry for the accounts app.

Django loads `<app>.models`; the models live in the infrastructure layer.
"""
from accounts.infrastructure.models import Account  # noqa: F401
