"""URL configuration for the club reservation backend.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the JWT token endpoints, the application routers provided by Django Rest
Framework and the OpenAPI schema.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/v1/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/v1/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    # Application URLs
    path('api/v1/fields/', include('apps.fields.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/members/', include('apps.members.urls')),
    path('api/v1/payments/', include('apps.finances.urls')),
    path('api/v1/', include('apps.shop.urls')),
]
