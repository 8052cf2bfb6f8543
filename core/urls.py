"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/deviation-chart/", views.deviation_chart_api, name="deviation_chart_api"),
]
