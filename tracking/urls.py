from django.urls import path
from . import views

urlpatterns = [
    # Back office
    path('shipments/', views.ShipmentListView.as_view(), name='shipment-list'),
    path('shipments/<int:pk>/', views.ShipmentDetailView.as_view(), name='shipment-detail'),
    path('shipments/<int:pk>/events/', views.TrackingEventListView.as_view(), name='shipment-events'),

    # Public lookup
    path('lookup/<str:tracking_number>/', views.TrackingLookupView.as_view(), name='track-shipment'),
]
