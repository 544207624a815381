from django.urls import path
from .views import ExerciseListView, TextToSpeechView

urlpatterns = [
    path("speech/synthesize/", TextToSpeechView.as_view(), name="speech-synthesize"),
    path("speech/exercises/", ExerciseListView.as_view(), name="speech-exercises"),
]
