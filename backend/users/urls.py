#backend/users/urls.py
from django.urls import path
from . import views
from rest_framework_simplejwt.views import (
    TokenObtainPairView,
    TokenRefreshView,
)

app_name = 'accounts'

urlpatterns = [
    # =====================================================
    # AUTHENTICATION ENDPOINTS
    # =====================================================
    path('login/', views.LoginView.as_view(), name='login'),
    path('logout/', views.logout_view, name='accounts_logout'),

    # JWT token endpoints (alternative to custom login)
    path('token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # =====================================================
    # PROFILE / DIRECTORY
    # =====================================================
    path('me/', views.MeView.as_view(), name='me'),
    path('search/', views.UserSearchView.as_view(), name='user_search'),

    # =====================================================
    # STUDENTS (Admission intake, registrar lookup)
    # =====================================================
    path('students/', views.StudentListCreateView.as_view(), name='students'),
    path('students/<int:pk>/', views.StudentDetailView.as_view(), name='student_detail'),
]
