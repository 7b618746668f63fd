"""
Model registry for the notifications app.

Django loads `<app>.models`; the models live in the infrastructure layer.
"""
from notifications.infrastructure.models import Notification  # noqa: F401
