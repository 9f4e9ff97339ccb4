from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'household'

router = SimpleRouter()
router.register(r'notices', views.NoticeViewSet, basename='notice')
router.register(r'tasks', views.TaskViewSet, basename='task')
router.register(r'reviews', views.ReviewViewSet, basename='review')

urlpatterns = [
    # Nested under /api/messes/{mess_id}/household/
    # GET/POST    notices/                - Notice board (manager posts)
    # DELETE      notices/{id}/           - Delete notice (manager)
    # GET/POST    tasks/                  - Task list
    # POST        tasks/{id}/toggle/      - Flip pending/completed
    # DELETE      tasks/{id}/             - Delete task (creator or manager)
    # GET/POST    reviews/                - Reviews (one per member)
    # GET         reviews/summary/        - Average rating
    # PATCH       reviews/{id}/           - Edit own review
    # DELETE      reviews/{id}/           - Delete review (author or manager)
    path('', include(router.urls)),
]
