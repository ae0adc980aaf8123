from django.urls import include, path

urlpatterns = [
    path("api/", include("simulation_results.urls")),
]
