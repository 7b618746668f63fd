"""
URL configuration for superadmin API endpoints.
"""

from django.urls import path

from api.v1.superadmin import views

app_name = "superadmin"

urlpatterns = [
    path("create-admin", views.CreateAdminView.as_view(), name="create-admin"),
    path("admins", views.ListAdminsView.as_view(), name="list-admins"),
    path(
        "renew-license/<uuid:admin_id>",
        views.RenewAdminLicenseView.as_view(),
        name="renew-license",
    ),
    path(
        "toggle-admin/<uuid:admin_id>",
        views.ToggleAdminView.as_view(),
        name="toggle-admin",
    ),
    path(
        "update-expiry/<uuid:admin_id>",
        views.UpdateAdminExpiryView.as_view(),
        name="update-expiry",
    ),
    path(
        "expiring-licenses",
        views.ExpiringLicensesView.as_view(),
        name="expiring-licenses",
    ),
]
