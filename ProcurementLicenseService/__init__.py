"""
Procurement License Service Django project.
"""
