from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from utils.health import health

handler404 = "utils.exceptions.route_not_found"

urlpatterns = [
    path("health/", health, name="health"),
    path("api/", include("clarivo.api_urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]
