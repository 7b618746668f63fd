"""
Model registry for the licenses app.

Django loads `<app>.models`; the models live in the infrastructure layer.
"""
from licenses.infrastructure.models import License  # noqa: F401
