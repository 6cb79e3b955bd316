from django.urls import path
from . import views

urlpatterns = [
    # Contact inbox
    path('messages/', views.ContactMessageListView.as_view(), name='message-list'),
    path('messages/unread-count/', views.UnreadMessageCountView.as_view(), name='message-unread-count'),
    path('messages/<int:pk>/', views.ContactMessageDetailView.as_view(), name='message-detail'),

    # Quote requests
    path('quotes/', views.QuoteRequestListView.as_view(), name='quote-list'),
    path('quotes/<int:pk>/', views.QuoteRequestDetailView.as_view(), name='quote-detail'),
]
