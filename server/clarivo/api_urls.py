from django.urls import path, include
from rest_framework.routers import DefaultRouter

from practice.views import PracticeSessionViewSet


router = DefaultRouter()

# Practice
router.register(r'sessions', PracticeSessionViewSet, basename='session')


urlpatterns = router.urls + [
    path('', include('speech.urls')),
    path('', include('users.urls')),
]
