"""
REST API views for the Community Help Marketplace.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.exceptions import PermissionDenied
from rest_framework.generics import ListAPIView, RetrieveAPIView
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from . import matching, notifications
from .models import Booking, HelpRequest, Profile, Review, Skill, UserSkill
from .permissions import (
    CanUpdateBookingStatus,
    IsBookingParticipant,
    IsOwner,
    IsRequestOwner,
)
from .serializers import (
    BookingApplySerializer,
    BookingDetailSerializer,
    BookingSerializer,
    BookingStatusUpdateSerializer,
    EmailTokenObtainPairSerializer,
    HelpRequestCreateSerializer,
    HelpRequestDetailSerializer,
    HelpRequestSerializer,
    NotificationSerializer,
    ProfileSerializer,
    ProfileSummarySerializer,
    PublicProfileSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    SkillSerializer,
    UserSkillSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def get_client_ip(request):
    """
    Get client IP address from request.
    Handles proxy headers for accurate IP detection.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


class EmailTokenObtainPairView(TokenObtainPairView):
    """
    Custom view to use email-based authentication instead of username.

    POST /api/token/
    Request body: {"email": "user@example.com", "password": "..."}
    """
    serializer_class = EmailTokenObtainPairSerializer
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'auth'


# ============================================================================
# Profiles and Skills
# ============================================================================

class ProfileView(APIView):
    """
    API endpoint for the authenticated member's own profile.

    GET /api/profile/
    PUT /api/profile/    (full update)
    PATCH /api/profile/  (partial update)
    Headers: Authorization: Bearer <access_token>

    Editable fields: display_name, bio, location, phone, avatar_url,
    is_available. rating and total_reviews are ignored if sent.

    Error responses:
    - 401: Missing, invalid, or expired JWT token
    - 400: Validation error (e.g. malformed phone or avatar URL)
    """
    permission_classes = [IsAuthenticated]

    def get_object(self):
        profile, _ = Profile.objects.get_or_create(user=self.request.user)
        return profile

    def get(self, request, *args, **kwargs):
        serializer = ProfileSerializer(self.get_object())
        return Response(serializer.data, status=status.HTTP_200_OK)

    def put(self, request, *args, **kwargs):
        return self._update(request, partial=False)

    def patch(self, request, *args, **kwargs):
        return self._update(request, partial=True)

    def _update(self, request, partial):
        profile = self.get_object()
        serializer = ProfileSerializer(profile, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        serializer.save()

        logger.info(
            f"Profile updated. User: {request.user.email} (ID: {request.user.id}), "
            f"Fields: {', '.join(sorted(serializer.validated_data))}"
        )
        return Response(serializer.data, status=status.HTTP_200_OK)


class PublicProfileView(RetrieveAPIView):
    """
    GET /api/profiles/<user_id>/

    Public view of any member's profile with their skills.
    Returns 404 when the member does not exist.
    """
    permission_classes = [AllowAny]
    serializer_class = PublicProfileSerializer
    queryset = Profile.objects.select_related('user')
    lookup_field = 'user_id'
    lookup_url_kwarg = 'pk'


class SkillListView(ListAPIView):
    """
    GET /api/skills/

    Every skill ordered by category, then name. Not paginated.
    """
    permission_classes = [AllowAny]
    serializer_class = SkillSerializer
    queryset = Skill.objects.all()
    pagination_class = None


class MySkillListCreateView(generics.ListCreateAPIView):
    """
    API endpoint for managing the authenticated member's skills.

    GET /api/skills/mine/
    POST /api/skills/mine/
    Request body: {"skill_id": 3, "experience_level": "advanced", "hourly_rate": "25.00"}

    Error responses:
    - 400: Unknown skill, invalid experience level, negative rate, or
      skill already listed
    """
    permission_classes = [IsAuthenticated]
    serializer_class = UserSkillSerializer
    pagination_class = None

    def get_queryset(self):
        return UserSkill.objects.filter(user=self.request.user).select_related('skill')

    def perform_create(self, serializer):
        user_skill = serializer.save()
        logger.info(
            f"Skill added. User: {self.request.user.email}, "
            f"Skill: {user_skill.skill.name} ({user_skill.experience_level})"
        )


class MySkillDestroyView(generics.DestroyAPIView):
    """
    DELETE /api/skills/mine/<id>/

    Only the owner can remove a listed skill (403 otherwise).
    """
    permission_classes = [IsAuthenticated, IsOwner]
    queryset = UserSkill.objects.select_related('skill')

    def perform_destroy(self, instance):
        logger.info(f"Skill removed. User: {self.request.user.email}, Skill: {instance.skill.name}")
        instance.delete()


# ============================================================================
# Help Requests
# ============================================================================

class HelpRequestListCreateView(generics.ListCreateAPIView):
    """
    API endpoint for browsing and posting help requests.

    GET /api/requests/
    Lists open requests, newest first, 20 per page.

    Query Parameters:
    - skill (optional): Case-insensitive substring of skill_needed
    - urgency (optional): Exact urgency (low, medium, high, urgent)
    - search (optional): Case-insensitive substring of title or description
    - page (optional): Page number

    POST /api/requests/
    Headers: Authorization: Bearer <access_token>
    Request body: {
        "title": "Fix a leaking tap",
        "description": "Kitchen tap drips constantly",
        "skill_needed": "Plumbing",
        "location": "Leeds",
        "budget_min": "20.00",
        "budget_max": "60.00",
        "urgency": "high"
    }

    Error responses:
    - 401: Not authenticated (POST only)
    - 400: Missing fields, invalid urgency, negative or inverted budget
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    throttle_scope = 'writes'

    def get_throttles(self):
        if self.request.method == 'POST':
            return [ScopedRateThrottle()]
        return []

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return HelpRequestCreateSerializer
        return HelpRequestSerializer

    def get_queryset(self):
        queryset = (
            HelpRequest.objects
            .filter(status=HelpRequest.OPEN)
            .select_related('requester__profile')
            .order_by('-created_at', '-id')
        )

        params = self.request.query_params

        skill = params.get('skill', '').strip()
        if skill:
            queryset = queryset.filter(skill_needed__icontains=skill)

        urgency = params.get('urgency', '').strip()
        if urgency:
            queryset = queryset.filter(urgency=urgency)

        search = params.get('search', '').strip()
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) | Q(description__icontains=search)
            )

        return queryset

    def perform_create(self, serializer):
        help_request = serializer.save()
        logger.info(
            f"Request {help_request.id} created. "
            f"User: {self.request.user.email} (ID: {self.request.user.id}), "
            f"Skill: {help_request.skill_needed}, IP: {get_client_ip(self.request)}"
        )


class MyHelpRequestListView(ListAPIView):
    """
    GET /api/requests/mine/

    The authenticated member's own requests in any status, newest first.
    """
    permission_classes = [IsAuthenticated]
    serializer_class = HelpRequestSerializer

    def get_queryset(self):
        return (
            HelpRequest.objects
            .filter(requester=self.request.user)
            .select_related('requester__profile')
            .order_by('-created_at', '-id')
        )


class HelpRequestDetailView(RetrieveAPIView):
    """
    GET /api/requests/<id>/

    Request detail including is_own_request, can_apply, suggested_price and
    the viewer's existing booking. Anonymous viewers get can_apply=false.
    """
    permission_classes = [AllowAny]
    serializer_class = HelpRequestDetailSerializer
    queryset = HelpRequest.objects.select_related('requester__profile')


class HelpRequestApplyView(APIView):
    """
    API endpoint for applying to help with a request.

    POST /api/requests/<id>/apply/
    Headers: Authorization: Bearer <access_token>
    Request body: {"agreed_price": "40.00", "notes": "Free on weekends"}

    Success response (201): the created booking, status "pending".

    Error responses:
    - 401: Missing, invalid, or expired JWT token
    - 404: Request not found
    - 400: Request not open, own request, already applied, negative price
    """
    permission_classes = [IsAuthenticated]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'writes'

    def post(self, request, *args, **kwargs):
        help_request = get_object_or_404(HelpRequest, pk=kwargs.get('pk'))

        serializer = BookingApplySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        with transaction.atomic():
            booking = help_request.apply(
                request.user,
                agreed_price=serializer.validated_data.get('agreed_price'),
                notes=serializer.validated_data.get('notes', '')
            )

        logger.info(
            f"Application submitted. Booking ID: {booking.id}, Request ID: {help_request.id}, "
            f"Helper: {request.user.email} (ID: {request.user.id}), IP: {get_client_ip(request)}"
        )

        response_serializer = BookingSerializer(booking, context={'request': request})
        return Response(response_serializer.data, status=status.HTTP_201_CREATED)


class HelpRequestCloseView(APIView):
    """
    POST /api/requests/<id>/close/

    Closes an open request. Requester only (403 otherwise); 400 when the
    request is not open.
    """
    permission_classes = [IsAuthenticated, IsRequestOwner]

    def post(self, request, *args, **kwargs):
        help_request = get_object_or_404(HelpRequest, pk=kwargs.get('pk'))
        self.check_object_permissions(request, help_request)

        help_request.close(request.user)

        serializer = HelpRequestSerializer(help_request, context={'request': request})
        return Response(serializer.data, status=status.HTTP_200_OK)


# ============================================================================
# Bookings
# ============================================================================

class BookingListView(APIView):
    """
    API endpoint listing the authenticated member's bookings.

    GET /api/bookings/
    Headers: Authorization: Bearer <access_token>

    Success response (200):
    {
        "as_helper": [...],     # bookings where the member offered help
        "as_requester": [...]   # applications to the member's requests
    }

    Both lists are newest first.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        base = Booking.objects.select_related(
            'request',
            'helper__profile',
            'requester__profile'
        ).order_by('-created_at', '-id')

        context = {'request': request}
        as_helper = BookingSerializer(base.filter(helper=request.user), many=True, context=context)
        as_requester = BookingSerializer(base.filter(requester=request.user), many=True, context=context)

        return Response({
            'as_helper': as_helper.data,
            'as_requester': as_requester.data,
        }, status=status.HTTP_200_OK)


class BookingDetailView(RetrieveAPIView):
    """
    GET /api/bookings/<id>/

    Booking with both participants and its reviews. Participants only (403
    otherwise).
    """
    permission_classes = [IsAuthenticated, IsBookingParticipant]
    serializer_class = BookingDetailSerializer
    queryset = Booking.objects.select_related(
        'request',
        'helper__profile',
        'requester__profile'
    ).prefetch_related('reviews__reviewer__profile', 'reviews__reviewee__profile')


class BookingStatusUpdateView(APIView):
    """
    API endpoint for updating booking status.

    Security features:
    - Requires JWT authentication
    - Requires object-level permissions (CanUpdateBookingStatus)
    - Enforces state machine transition rules
    - Locks the booking row and writes with compare-and-set so concurrent
      updates cannot both succeed
    - Logs all status changes for audit trail

    PUT /api/bookings/<id>/status/
    Headers: Authorization: Bearer <access_token>
    Request body: {"status": "accepted", "scheduled_date": "2026-05-01T10:00:00Z",
                   "expected_status": "pending"}

    Error responses:
    - 401: Missing, invalid, or expired JWT token
    - 403: User doesn't have permission for this transition
    - 404: Booking not found
    - 400: Invalid status or transition
    - 409: Booking status changed concurrently
    """
    permission_classes = [IsAuthenticated]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'writes'

    def put(self, request, *args, **kwargs):
        booking_id = kwargs.get('pk')

        with transaction.atomic():
            booking = get_object_or_404(
                Booking.objects.select_for_update().select_related('request'),
                pk=booking_id
            )

            permission = CanUpdateBookingStatus()
            if not permission.has_object_permission(request, self, booking):
                logger.warning(
                    f"Unauthorized booking status update attempt. "
                    f"Booking ID: {booking_id}, "
                    f"User: {request.user.email} (ID: {request.user.id}), "
                    f"IP: {get_client_ip(request)}"
                )
                raise PermissionDenied(permission.message)

            serializer = BookingStatusUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            old_status = booking.status
            booking.transition_to(
                request.user,
                serializer.validated_data['status'],
                scheduled_date=serializer.validated_data.get('scheduled_date'),
                expected_status=serializer.validated_data.get('expected_status')
            )

        logger.info(
            f"Booking status updated. "
            f"Booking ID: {booking_id}, "
            f"Old Status: {old_status}, "
            f"New Status: {booking.status}, "
            f"User: {request.user.email} (ID: {request.user.id}), "
            f"IP: {get_client_ip(request)}"
        )

        response_serializer = BookingSerializer(booking, context={'request': request})
        return Response(response_serializer.data, status=status.HTTP_200_OK)

    def patch(self, request, *args, **kwargs):
        return self.put(request, *args, **kwargs)


# ============================================================================
# Reviews
# ============================================================================

class BookingReviewCreateView(APIView):
    """
    API endpoint for reviewing the other participant of a completed booking.

    POST /api/bookings/<id>/reviews/
    Headers: Authorization: Bearer <access_token>
    Request body: {"rating": 5, "comment": "Fixed it in no time"}

    The reviewee is the helper when the requester reviews, and the
    requester when the helper reviews. The reviewee's profile rating is
    recomputed in the same transaction.

    Error responses:
    - 401: Missing, invalid, or expired JWT token
    - 403: User did not take part in the booking
    - 404: Booking not found
    - 400: Booking not completed, rating not 1-5, already reviewed
    """
    permission_classes = [IsAuthenticated]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = 'writes'

    def post(self, request, *args, **kwargs):
        booking = get_object_or_404(Booking, pk=kwargs.get('pk'))

        if not booking.is_participant(request.user):
            raise PermissionDenied('You can only review bookings you participated in.')

        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = booking.submit_review(
            request.user,
            serializer.validated_data['rating'],
            serializer.validated_data.get('comment', '')
        )

        logger.info(
            f"Review {review.id} created for booking {booking.id}. "
            f"Reviewer: {request.user.email}, Reviewee ID: {review.reviewee_id}, "
            f"Rating: {review.rating}"
        )
        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class ReviewDestroyView(generics.DestroyAPIView):
    """
    DELETE /api/reviews/<id>/

    Only the reviewer can delete their review. The post_delete signal
    recomputes the reviewee's rating.
    """
    permission_classes = [IsAuthenticated]
    queryset = Review.objects.all()

    def get_object(self):
        obj = super().get_object()
        if obj.reviewer_id != self.request.user.id:
            raise PermissionDenied('You can only delete your own reviews.')
        return obj

    def perform_destroy(self, instance):
        review_id = instance.pk
        with transaction.atomic():
            instance.delete()
        logger.info(f"Review {review_id} deleted by {self.request.user.email}")


# ============================================================================
# Discovery, Dashboard and Stats
# ============================================================================

class DiscoverView(APIView):
    """
    GET /api/discover/

    Success response (200):
    {
        "matching_requests": [...],   # up to 6 open requests needing your skills
        "trending_skills": [{"skill": "Plumbing", "count": 4}, ...],
        "recent_members": [...]       # 6 newest members other than you
    }
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        context = {'request': request}
        return Response({
            'matching_requests': HelpRequestSerializer(
                matching.matching_requests(request.user), many=True, context=context
            ).data,
            'trending_skills': [
                {'skill': name, 'count': count}
                for name, count in matching.trending_skills()
            ],
            'recent_members': ProfileSummarySerializer(
                matching.recent_members(request.user), many=True
            ).data,
        }, status=status.HTTP_200_OK)


class DashboardView(APIView):
    """
    GET /api/dashboard/

    The member's profile, skills and three most recent requests.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        profile, _ = Profile.objects.get_or_create(user=request.user)
        skills = UserSkill.objects.filter(user=request.user).select_related('skill')
        recent_requests = (
            HelpRequest.objects
            .filter(requester=request.user)
            .select_related('requester__profile')
            .order_by('-created_at', '-id')[:3]
        )

        return Response({
            'profile': ProfileSerializer(profile).data,
            'skills': UserSkillSerializer(skills, many=True).data,
            'recent_requests': HelpRequestSerializer(recent_requests, many=True).data,
        }, status=status.HTTP_200_OK)


class CommunityStatsView(APIView):
    """
    GET /api/stats/

    Public landing-page figures: member, request and completed booking
    counts, the six newest open requests, and the top four skills across the
    50 newest open requests.
    """
    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        open_requests = (
            HelpRequest.objects
            .filter(status=HelpRequest.OPEN)
            .select_related('requester__profile')
            .order_by('-created_at', '-id')
        )

        return Response({
            'total_members': Profile.objects.count(),
            'total_requests': HelpRequest.objects.count(),
            'completed_bookings': Booking.objects.filter(status=Booking.COMPLETED).count(),
            'recent_requests': HelpRequestSerializer(open_requests[:6], many=True).data,
            'popular_skills': [
                {'skill': name, 'count': count}
                for name, count in matching.trending_skills(sample_size=50, top=4)
            ],
        }, status=status.HTTP_200_OK)


# ============================================================================
# Notifications
# ============================================================================

class NotificationListView(APIView):
    """
    GET /api/notifications/

    All of the member's notifications, newest first. Unread ones are marked
    read after being listed; the response shows their state before marking.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        items = notifications.list_and_mark_read(request.user)
        return Response(NotificationSerializer(items, many=True).data, status=status.HTTP_200_OK)


class UnreadNotificationsView(APIView):
    """
    GET /api/notifications/unread/

    Success response (200):
    {"unread_count": 7, "results": [...5 newest unread...]}
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, *args, **kwargs):
        items, unread_count = notifications.unread_feed(request.user)
        return Response({
            'unread_count': unread_count,
            'results': NotificationSerializer(items, many=True).data,
        }, status=status.HTTP_200_OK)


class NotificationMarkReadView(APIView):
    """
    POST /api/notifications/<id>/read/

    Marks one notification read. Notifications of other members are
    reported as 404.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, *args, **kwargs):
        notification = notifications.mark_read(request.user, kwargs.get('pk'))
        return Response(NotificationSerializer(notification).data, status=status.HTTP_200_OK)
