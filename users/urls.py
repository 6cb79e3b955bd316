from django.urls import path
from . import views

urlpatterns = [
    # Authentication
    path('login/', views.AdminLoginView.as_view(), name='admin-login'),
    path('token/refresh/', views.SessionTokenRefreshView.as_view(), name='token-refresh'),
    path('logout/', views.AdminLogoutView.as_view(), name='admin-logout'),
    path('me/', views.CurrentAdminView.as_view(), name='admin-me'),
    path('sessions/', views.AdminSessionListView.as_view(), name='admin-sessions'),

    # Account management
    path('admins/', views.AdminAccountListView.as_view(), name='admin-list'),
    path('admins/<int:pk>/', views.AdminAccountDetailView.as_view(), name='admin-detail'),
    path('admins/<int:pk>/password/', views.AdminPasswordView.as_view(), name='admin-password'),
]
