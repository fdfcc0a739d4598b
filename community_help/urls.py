"""
URL configuration for the community_help project.

All API endpoints live under /api/ and speak JSON.
"""
from django.contrib import admin
from django.urls import path
from rest_framework_simplejwt.views import (
    TokenRefreshView,
    TokenVerifyView,
)
from marketplace.views import (
    BookingDetailView,
    BookingListView,
    BookingReviewCreateView,
    BookingStatusUpdateView,
    CommunityStatsView,
    DashboardView,
    DiscoverView,
    EmailTokenObtainPairView,
    HelpRequestApplyView,
    HelpRequestCloseView,
    HelpRequestDetailView,
    HelpRequestListCreateView,
    MyHelpRequestListView,
    MySkillDestroyView,
    MySkillListCreateView,
    NotificationListView,
    NotificationMarkReadView,
    ProfileView,
    PublicProfileView,
    ReviewDestroyView,
    SkillListView,
    UnreadNotificationsView,
)


urlpatterns = [
    path('admin/', admin.site.urls),

    # Profile and skill endpoints
    path('api/profile/', ProfileView.as_view(), name='profile'),
    path('api/profiles/<int:pk>/', PublicProfileView.as_view(), name='public_profile'),
    path('api/skills/', SkillListView.as_view(), name='skill_list'),
    path('api/skills/mine/', MySkillListCreateView.as_view(), name='my_skills'),
    path('api/skills/mine/<int:pk>/', MySkillDestroyView.as_view(), name='my_skill_delete'),

    # Help request endpoints
    path('api/requests/', HelpRequestListCreateView.as_view(), name='request_list'),
    path('api/requests/mine/', MyHelpRequestListView.as_view(), name='my_requests'),
    path('api/requests/<int:pk>/', HelpRequestDetailView.as_view(), name='request_detail'),
    path('api/requests/<int:pk>/apply/', HelpRequestApplyView.as_view(), name='request_apply'),
    path('api/requests/<int:pk>/close/', HelpRequestCloseView.as_view(), name='request_close'),

    # Booking endpoints
    path('api/bookings/', BookingListView.as_view(), name='booking_list'),
    path('api/bookings/<int:pk>/', BookingDetailView.as_view(), name='booking_detail'),
    path('api/bookings/<int:pk>/status/', BookingStatusUpdateView.as_view(), name='booking_status_update'),
    path('api/bookings/<int:pk>/reviews/', BookingReviewCreateView.as_view(), name='booking_review_create'),
    path('api/reviews/<int:pk>/', ReviewDestroyView.as_view(), name='review_delete'),

    # Discovery endpoints
    path('api/discover/', DiscoverView.as_view(), name='discover'),
    path('api/dashboard/', DashboardView.as_view(), name='dashboard'),
    path('api/stats/', CommunityStatsView.as_view(), name='community_stats'),

    # Notification endpoints
    path('api/notifications/', NotificationListView.as_view(), name='notification_list'),
    path('api/notifications/unread/', UnreadNotificationsView.as_view(), name='notification_unread'),
    path('api/notifications/<int:pk>/read/', NotificationMarkReadView.as_view(), name='notification_read'),

    # JWT Authentication endpoints
    path('api/token/', EmailTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('api/token/verify/', TokenVerifyView.as_view(), name='token_verify'),
]
