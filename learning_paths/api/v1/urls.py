"""API v1 URLs."""

from rest_framework import routers

from learning_paths.api.v1.views import LearningPathViewSet

router = routers.SimpleRouter()
router.register(r"paths", LearningPathViewSet, basename="learning-path")

urlpatterns = router.urls
