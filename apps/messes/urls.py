from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'messes'

router = DefaultRouter()
router.register(r'', views.MessViewSet, basename='mess')

urlpatterns = [
    # GET    /api/messes/                        - List user's messes
    # POST   /api/messes/                        - Create mess
    # GET    /api/messes/{id}/                   - Get mess details
    # GET    /api/messes/{id}/members/           - List roster
    # POST   /api/messes/{id}/members/           - Add roster entry (manager)
    # POST   /api/messes/{id}/leave/             - Leave mess
    # PATCH  /api/messes/{id}/update_member/     - Edit roster entry (manager)
    # POST   /api/messes/{id}/remove_member/     - Remove roster entry (manager)
    path('my/', views.my_messes, name='my-messes'),
    path('join/', views.join, name='join'),

    path('', include(router.urls)),
]
