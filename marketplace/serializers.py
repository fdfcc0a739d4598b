"""
Serializers for the marketplace REST API.
"""

from decimal import Decimal

from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import (
    Booking,
    HelpRequest,
    Notification,
    Profile,
    Review,
    Skill,
    UserSkill,
)

User = get_user_model()


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Custom serializer to use email instead of username for authentication.
    """
    username_field = 'email'

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if 'username' in self.fields:
            del self.fields['username']
        if 'email' not in self.fields:
            self.fields['email'] = serializers.EmailField()

    def validate(self, attrs):
        if attrs.get('email'):
            attrs['email'] = attrs['email'].lower()
        return super().validate(attrs)


# ============================================================================
# Profile and Skill Serializers
# ============================================================================

class ProfileSummarySerializer(serializers.ModelSerializer):
    """
    Compact profile shown next to requests, bookings and reviews.

    Exposes only public details; email and phone are never included.
    """

    id = serializers.IntegerField(source='user_id', read_only=True)

    class Meta:
        model = Profile
        fields = ['id', 'display_name', 'avatar_url', 'location', 'rating', 'total_reviews']
        read_only_fields = fields


class SkillSerializer(serializers.ModelSerializer):

    class Meta:
        model = Skill
        fields = ['id', 'name', 'category']
        read_only_fields = fields


class UserSkillSerializer(serializers.ModelSerializer):
    """
    A skill the authenticated member offers.

    Fields:
    - skill: Nested skill (read-only)
    - skill_id: Required on create, id of an existing Skill
    - experience_level: Required, beginner / intermediate / advanced / expert
    - hourly_rate: Optional, non-negative
    """

    skill = SkillSerializer(read_only=True)
    skill_id = serializers.PrimaryKeyRelatedField(
        queryset=Skill.objects.all(),
        source='skill',
        write_only=True
    )

    class Meta:
        model = UserSkill
        fields = ['id', 'skill', 'skill_id', 'experience_level', 'hourly_rate', 'created_at']
        read_only_fields = ['id', 'created_at']
        validators = []

    def validate_hourly_rate(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Hourly rate cannot be negative.")
        return value

    def validate(self, attrs):
        user = self.context['request'].user
        skill = attrs.get('skill')

        if skill and UserSkill.objects.filter(user=user, skill=skill).exists():
            raise serializers.ValidationError({
                'skill_id': f"You already list {skill.name} as a skill."
            })

        return attrs

    def create(self, validated_data):
        validated_data['user'] = self.context['request'].user
        return UserSkill.objects.create(**validated_data)


class ProfileSerializer(serializers.ModelSerializer):
    """
    Full profile of the authenticated member.

    rating and total_reviews are maintained from reviews and are read-only.
    """

    id = serializers.IntegerField(source='user_id', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id', 'email', 'display_name', 'bio', 'location', 'phone',
            'avatar_url', 'is_available', 'rating', 'total_reviews',
            'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'email', 'rating', 'total_reviews', 'created_at', 'updated_at']

    def validate_display_name(self, value):
        value = value.strip()
        if len(value) > 100:
            raise serializers.ValidationError("Display name cannot exceed 100 characters.")
        return value

    def update(self, instance, validated_data):
        # Edited columns only; rating and total_reviews belong to the aggregator
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save(update_fields=list(validated_data) + ['updated_at'])
        return instance


class PublicProfileSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source='user_id', read_only=True)
    skills = serializers.SerializerMethodField()

    class Meta:
        model = Profile
        fields = [
            'id', 'display_name', 'bio', 'location', 'avatar_url',
            'is_available', 'rating', 'total_reviews', 'skills', 'created_at',
        ]
        read_only_fields = fields

    def get_skills(self, obj):
        user_skills = UserSkill.objects.filter(user_id=obj.user_id).select_related('skill')
        return UserSkillSerializer(user_skills, many=True).data


# ============================================================================
# Help Request Serializers
# ============================================================================

class HelpRequestSerializer(serializers.ModelSerializer):
    """
    Help request as listed when browsing.

    Includes the formatted budget and a summary of the requester.
    """

    requester = ProfileSummarySerializer(source='requester.profile', read_only=True)
    budget_display = serializers.CharField(read_only=True)

    class Meta:
        model = HelpRequest
        fields = [
            'id', 'title', 'description', 'skill_needed', 'location',
            'budget_min', 'budget_max', 'budget_display', 'urgency', 'status',
            'requester', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class HelpRequestCreateSerializer(serializers.ModelSerializer):
    """
    Serializer for posting a help request.

    Validation:
    - title, description and skill_needed are required and non-blank
    - urgency must be one of low, medium, high, urgent (default medium)
    - budget_min / budget_max are optional, non-negative, min <= max

    The requester is the authenticated user and the status always starts open.
    """

    class Meta:
        model = HelpRequest
        fields = [
            'id', 'title', 'description', 'skill_needed', 'location',
            'budget_min', 'budget_max', 'urgency', 'status', 'created_at',
        ]
        read_only_fields = ['id', 'status', 'created_at']
        extra_kwargs = {
            'title': {'required': True},
            'description': {'required': True},
            'skill_needed': {'required': True},
        }

    def validate_budget_min(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Budget cannot be negative.")
        return value

    def validate_budget_max(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("Budget cannot be negative.")
        return value

    def validate(self, attrs):
        budget_min = attrs.get('budget_min')
        budget_max = attrs.get('budget_max')

        if budget_min is not None and budget_max is not None and budget_min > budget_max:
            raise serializers.ValidationError({
                'budget_max': "Maximum budget cannot be lower than the minimum budget."
            })

        return attrs

    def create(self, validated_data):
        validated_data['requester'] = self.context['request'].user
        return HelpRequest.objects.create(**validated_data)


class BookingSummarySerializer(serializers.ModelSerializer):

    class Meta:
        model = Booking
        fields = ['id', 'status', 'agreed_price', 'scheduled_date', 'created_at']
        read_only_fields = fields


class HelpRequestDetailSerializer(HelpRequestSerializer):
    """
    Help request detail as seen by a specific viewer.

    Extra fields:
    - is_own_request: The viewer posted this request
    - existing_booking: The viewer's application, if any
    - can_apply: Open, not own, not yet applied
    - suggested_price: Budget midpoint, or whichever bound is set
    """

    is_own_request = serializers.SerializerMethodField()
    existing_booking = serializers.SerializerMethodField()
    can_apply = serializers.SerializerMethodField()
    suggested_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        read_only=True
    )

    class Meta(HelpRequestSerializer.Meta):
        fields = HelpRequestSerializer.Meta.fields + [
            'is_own_request', 'existing_booking', 'can_apply', 'suggested_price',
        ]
        read_only_fields = fields

    def _viewer(self):
        request = self.context.get('request')
        return request.user if request else None

    def _viewer_booking(self, obj):
        viewer = self._viewer()
        if viewer is None or not viewer.is_authenticated:
            return None
        return obj.bookings.filter(helper=viewer).first()

    def get_is_own_request(self, obj):
        viewer = self._viewer()
        return bool(viewer and viewer.is_authenticated and obj.requester_id == viewer.id)

    def get_existing_booking(self, obj):
        booking = self._viewer_booking(obj)
        return BookingSummarySerializer(booking).data if booking else None

    def get_can_apply(self, obj):
        viewer = self._viewer()
        if viewer is None or not viewer.is_authenticated:
            return False
        return (
            obj.is_open()
            and obj.requester_id != viewer.id
            and self._viewer_booking(obj) is None
        )


# ============================================================================
# Booking Serializers
# ============================================================================

class BookingApplySerializer(serializers.Serializer):
    """
    Input for applying to a request.

    Fields:
    - agreed_price: Optional, non-negative
    - notes: Optional free text
    """

    agreed_price = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        required=False,
        allow_null=True
    )
    notes = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_agreed_price(self, value):
        if value is not None and value < Decimal('0'):
            raise serializers.ValidationError("Agreed price cannot be negative.")
        return value


class RequestSummarySerializer(serializers.ModelSerializer):
    budget_display = serializers.CharField(read_only=True)

    class Meta:
        model = HelpRequest
        fields = ['id', 'title', 'skill_needed', 'status', 'urgency', 'budget_display']
        read_only_fields = fields


class BookingSerializer(serializers.ModelSerializer):
    """
    Booking with its request and both participants.

    other_party is the participant that is not the viewer.
    """

    request = RequestSummarySerializer(read_only=True)
    helper = ProfileSummarySerializer(source='helper.profile', read_only=True)
    requester = ProfileSummarySerializer(source='requester.profile', read_only=True)
    other_party = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            'id', 'request', 'helper', 'requester', 'other_party',
            'agreed_price', 'notes', 'status', 'scheduled_date',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_other_party(self, obj):
        request = self.context.get('request')
        if not request or not obj.is_participant(request.user):
            return None
        other = obj.requester if obj.other_party_id(request.user) == obj.requester_id else obj.helper
        return ProfileSummarySerializer(other.profile).data


class ReviewSerializer(serializers.ModelSerializer):
    reviewer = ProfileSummarySerializer(source='reviewer.profile', read_only=True)
    reviewee = ProfileSummarySerializer(source='reviewee.profile', read_only=True)

    class Meta:
        model = Review
        fields = ['id', 'booking', 'reviewer', 'reviewee', 'rating', 'comment', 'created_at']
        read_only_fields = fields


class BookingDetailSerializer(BookingSerializer):
    reviews = ReviewSerializer(many=True, read_only=True)

    class Meta(BookingSerializer.Meta):
        fields = BookingSerializer.Meta.fields + ['reviews']
        read_only_fields = fields


class BookingStatusUpdateSerializer(serializers.Serializer):
    """
    Input for a booking status change.

    Fields:
    - status: Required, one of pending, accepted, declined, completed, cancelled
    - scheduled_date: Optional, only meaningful when accepting
    - expected_status: Optional, the status the client last saw; a mismatch
      with the stored status is a 409 conflict

    Transition and role rules are enforced by Booking.transition_to().
    """

    status = serializers.CharField(required=True)
    scheduled_date = serializers.DateTimeField(required=False, allow_null=True)
    expected_status = serializers.ChoiceField(choices=Booking.STATUS_CHOICES, required=False)

    def validate_status(self, value):
        valid_statuses = [choice for choice, _ in Booking.STATUS_CHOICES]

        if value not in valid_statuses:
            raise serializers.ValidationError(
                f"Invalid status. Must be one of: {', '.join(valid_statuses)}."
            )

        return value

    def validate(self, attrs):
        if attrs.get('scheduled_date') and attrs['status'] != Booking.ACCEPTED:
            raise serializers.ValidationError({
                'scheduled_date': "A schedule can only be attached when accepting a booking."
            })
        return attrs


class ReviewCreateSerializer(serializers.Serializer):
    """
    Input for reviewing a completed booking.

    The reviewer is the authenticated user and the reviewee is derived from
    the booking, so neither is accepted from the client.
    """

    rating = serializers.IntegerField(required=True)
    comment = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_rating(self, value):
        if value < 1 or value > 5:
            raise serializers.ValidationError(
                "Rating must be between 1 and 5."
            )
        return value


# ============================================================================
# Notification Serializers
# ============================================================================

class NotificationSerializer(serializers.ModelSerializer):

    class Meta:
        model = Notification
        fields = ['id', 'type', 'title', 'message', 'related_id', 'is_read', 'created_at']
        read_only_fields = fields
