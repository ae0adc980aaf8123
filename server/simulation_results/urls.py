from django.urls import path

from .views import ResultDetailView, ResultDownloadView, ResultExportView, ResultListView

urlpatterns = [
    path("results/", ResultListView.as_view(), name="result-list"),
    path("results/<uuid:pk>/", ResultDetailView.as_view(), name="result-detail"),
    path("results/<uuid:pk>/export.csv", ResultDownloadView.as_view(), {"fmt": "csv"}, name="result-download-csv"),
    path("results/<uuid:pk>/export.json", ResultDownloadView.as_view(), {"fmt": "json"}, name="result-download-json"),
    path("results/<uuid:pk>/export/", ResultExportView.as_view(), name="result-export"),
]
