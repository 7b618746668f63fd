"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin_api"

urlpatterns = [
    path("my-data", views.MyAdminDataView.as_view(), name="my-data"),
]
