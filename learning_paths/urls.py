"""
Root URLs for learning_paths.

Include this module from a project URLconf, or use it directly as ROOT_URLCONF.
"""

from django.urls import include, path

urlpatterns = [
    path("api/learning_paths/", include("learning_paths.api.urls")),
]
