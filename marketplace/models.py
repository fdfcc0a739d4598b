"""
Data model for the Community Help Marketplace.
"""

import logging

from django.contrib.auth.models import AbstractUser
from django.core.exceptions import PermissionDenied, ValidationError
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.db.models import Count, Sum
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .exceptions import BookingConflictError
from .utils import format_budget, suggest_agreed_price
from .validators import (
    validate_non_negative_amount,
    validate_not_blank,
    validate_phone_number,
)

logger = logging.getLogger(__name__)


class User(AbstractUser):
    """
    Auth identity. Everything shown to other members lives on Profile.

    Email is required, unique and stored lowercase; it is the login
    identifier for token authentication.
    """

    email = models.EmailField(
        _('email address'),
        unique=True,
        blank=False,
        null=False,
        error_messages={
            'unique': _('A user with that email already exists.'),
        },
        help_text=_('Required. Enter a valid email address.')
    )

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['email'], name='marketplace_user_email_idx'),
        ]

    def __str__(self):
        return self.email or self.username

    @property
    def display_name(self):
        """Profile display name, falling back to the email's local part."""
        profile = getattr(self, 'profile', None)
        if profile and profile.display_name:
            return profile.display_name
        return (self.email or self.username).split('@')[0]

    def skill_names(self):
        """Names of the skills this user declared they can help with."""
        return list(
            Skill.objects.filter(user_skills__user=self).values_list('name', flat=True)
        )

    def clean(self):
        super().clean()

        if self.email:
            self.email = self.email.lower()

        if not self.email:
            raise ValidationError({
                'email': _('Email address is required.')
            })

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.lower()
        super().save(*args, **kwargs)


class Profile(models.Model):
    """
    Public profile of a community member.

    Fields:
    - user: Owning user; the profile shares its primary key
    - display_name, bio, location, phone, avatar_url: Self-managed details
    - is_available: Whether the member is currently taking on help requests
    - rating: Mean of all review ratings received (0-5)
    - total_reviews: Number of reviews received

    rating and total_reviews are derived data. They are only written by
    recalculate_rating(), never by profile edits.
    """

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='profile',
        help_text=_('User this profile belongs to')
    )

    display_name = models.CharField(_('display name'), max_length=100, blank=True, default='')
    bio = models.TextField(_('bio'), blank=True, default='')
    location = models.CharField(_('location'), max_length=200, blank=True, default='')

    phone = models.CharField(
        _('phone'),
        max_length=20,
        blank=True,
        default='',
        validators=[validate_phone_number],
        help_text=_('Optional. Enter phone number in international format.')
    )

    avatar_url = models.URLField(
        _('avatar URL'),
        max_length=500,
        blank=True,
        default='',
        help_text=_('Link to an externally hosted avatar image')
    )

    is_available = models.BooleanField(
        _('available'),
        default=True,
        help_text=_('Whether the member is currently available to help')
    )

    rating = models.FloatField(
        _('rating'),
        default=0.0,
        validators=[
            MinValueValidator(0.0, message=_('Rating cannot be negative.')),
            MaxValueValidator(5.0, message=_('Rating cannot exceed 5.'))
        ],
        help_text=_('Average rating received from reviews')
    )

    total_reviews = models.PositiveIntegerField(
        _('total reviews'),
        default=0,
        help_text=_('Number of reviews received')
    )

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        db_table = 'profiles'
        verbose_name = _('profile')
        verbose_name_plural = _('profiles')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_available'], name='profiles_available_idx'),
            models.Index(fields=['rating'], name='profiles_rating_idx'),
        ]

    def __str__(self):
        return self.display_name or str(self.user)

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def recalculate_rating(self):
        """
        Recompute rating and total_reviews from every review this user received.

        The mean is computed from the integer sum and count so the stored value
        is exactly sum / count. With no reviews the aggregate resets to 0.

        Returns:
            tuple: (rating, total_reviews)
        """
        stats = Review.objects.filter(reviewee_id=self.user_id).aggregate(
            total=Sum('rating'),
            count=Count('id')
        )
        count = stats['count'] or 0
        rating = stats['total'] / count if count else 0.0

        Profile.objects.filter(pk=self.pk).update(
            rating=rating,
            total_reviews=count,
            updated_at=timezone.now()
        )
        self.rating = rating
        self.total_reviews = count
        return rating, count


class Skill(models.Model):
    """Reference list of skills members can offer and requests can ask for."""

    name = models.CharField(_('name'), max_length=100, unique=True)
    category = models.CharField(_('category'), max_length=100)

    class Meta:
        db_table = 'skills'
        verbose_name = _('skill')
        verbose_name_plural = _('skills')
        ordering = ['category', 'name']

    def __str__(self):
        return self.name


class UserSkill(models.Model):
    """
    A skill a member declared, with experience level and optional hourly rate.

    One row per (user, skill).
    """

    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'
    EXPERT = 'expert'

    EXPERIENCE_LEVEL_CHOICES = [
        (BEGINNER, 'Beginner'),
        (INTERMEDIATE, 'Intermediate'),
        (ADVANCED, 'Advanced'),
        (EXPERT, 'Expert'),
    ]

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='user_skills',
        help_text=_('Member offering the skill')
    )

    skill = models.ForeignKey(
        Skill,
        on_delete=models.CASCADE,
        related_name='user_skills',
        help_text=_('Skill being offered')
    )

    experience_level = models.CharField(
        _('experience level'),
        max_length=20,
        choices=EXPERIENCE_LEVEL_CHOICES
    )

    hourly_rate = models.DecimalField(
        _('hourly rate'),
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[validate_non_negative_amount],
        help_text=_('Optional hourly rate in USD')
    )

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)

    class Meta:
        db_table = 'user_skills'
        verbose_name = _('user skill')
        verbose_name_plural = _('user skills')
        ordering = ['skill__category', 'skill__name']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'skill'],
                name='unique_user_skill'
            )
        ]

    def __str__(self):
        return f"{self.user} - {self.skill} ({self.experience_level})"

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class HelpRequest(models.Model):
    """
    A posted ask for help with a specific skill.

    Fields:
    - requester: Member asking for help
    - title, description: What is needed (required)
    - skill_needed: Free-text skill name, normally one of Skill.name
    - location: Optional place where help is needed
    - budget_min, budget_max: Optional non-negative budget bounds (min <= max)
    - urgency: low, medium, high or urgent
    - status: open, closed or completed
    """

    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    URGENT = 'urgent'

    URGENCY_CHOICES = [
        (LOW, 'Low'),
        (MEDIUM, 'Medium'),
        (HIGH, 'High'),
        (URGENT, 'Urgent'),
    ]

    OPEN = 'open'
    CLOSED = 'closed'
    COMPLETED = 'completed'

    STATUS_CHOICES = [
        (OPEN, 'Open'),
        (CLOSED, 'Closed'),
        (COMPLETED, 'Completed'),
    ]

    requester = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='help_requests',
        help_text=_('Member asking for help')
    )

    title = models.CharField(
        _('title'),
        max_length=200,
        validators=[validate_not_blank]
    )

    description = models.TextField(
        _('description'),
        validators=[validate_not_blank]
    )

    skill_needed = models.CharField(
        _('skill needed'),
        max_length=100,
        validators=[validate_not_blank]
    )

    location = models.CharField(_('location'), max_length=200, blank=True, default='')

    budget_min = models.DecimalField(
        _('minimum budget'),
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[validate_non_negative_amount]
    )

    budget_max = models.DecimalField(
        _('maximum budget'),
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[validate_non_negative_amount]
    )

    urgency = models.CharField(
        _('urgency'),
        max_length=10,
        choices=URGENCY_CHOICES,
        default=MEDIUM
    )

    status = models.CharField(
        _('status'),
        max_length=10,
        choices=STATUS_CHOICES,
        default=OPEN
    )

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        db_table = 'requests'
        verbose_name = _('help request')
        verbose_name_plural = _('help requests')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['requester'], name='requests_requester_idx'),
            models.Index(fields=['status'], name='requests_status_idx'),
            models.Index(fields=['skill_needed'], name='requests_skill_idx'),
            models.Index(fields=['urgency'], name='requests_urgency_idx'),
        ]

    def __str__(self):
        return self.title

    def clean(self):
        """
        Validate the budget range.

        Blank title/description/skill_needed and negative budgets are caught
        by the field validators.
        """
        super().clean()

        if (
            self.budget_min is not None
            and self.budget_max is not None
            and self.budget_min > self.budget_max
        ):
            raise ValidationError({
                'budget_max': _('Maximum budget cannot be lower than the minimum budget.')
            })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def is_open(self):
        return self.status == self.OPEN

    @property
    def budget_display(self):
        return format_budget(self.budget_min, self.budget_max)

    @property
    def suggested_price(self):
        """Price pre-filled on the apply form."""
        return suggest_agreed_price(self.budget_min, self.budget_max)

    def apply(self, helper, agreed_price=None, notes=''):
        """
        Create a pending booking for ``helper`` on this request.

        Raises:
            ValidationError: If the request is not open, the helper is the
                requester, the helper already applied, or the price is negative
        """
        booking = Booking(
            request=self,
            helper=helper,
            requester_id=self.requester_id,
            agreed_price=agreed_price,
            notes=notes or '',
            status=Booking.PENDING
        )
        booking.save()

        logger.info(
            f"Booking {booking.id} created: helper={helper.email} "
            f"request={self.id} requester_id={self.requester_id}"
        )
        return booking

    def close(self, actor):
        """
        Close an open request so it stops receiving applications.

        Raises:
            PermissionDenied: If actor is not the requester
            ValidationError: If the request is not open
        """
        if actor.id != self.requester_id:
            raise PermissionDenied('Only the requester can close this request.')

        if not self.is_open():
            raise ValidationError({
                'status': _(
                    'Only open requests can be closed. This request is %(status)s.'
                ) % {'status': self.status}
            })

        self.status = self.CLOSED
        self.save(update_fields=['status', 'updated_at'])
        logger.info(f"Request {self.id} closed by {actor.email}")
        return self


class Booking(models.Model):
    """
    A helper's application to fulfil a help request.

    Status lifecycle:
    - pending -> accepted (requester only, may attach scheduled_date)
    - pending -> declined (requester only)
    - accepted -> completed (requester or helper)
    - any state except cancelled -> cancelled (requester or helper)

    requester is copied from the request when the booking is created.
    """

    PENDING = 'pending'
    ACCEPTED = 'accepted'
    DECLINED = 'declined'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (ACCEPTED, 'Accepted'),
        (DECLINED, 'Declined'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    VALID_TRANSITIONS = {
        PENDING: [ACCEPTED, DECLINED, CANCELLED],
        ACCEPTED: [COMPLETED, CANCELLED],
        DECLINED: [CANCELLED],
        COMPLETED: [CANCELLED],
        CANCELLED: [],
    }

    # Transitions only the requester may perform
    REQUESTER_ONLY = {ACCEPTED, DECLINED}

    request = models.ForeignKey(
        HelpRequest,
        on_delete=models.CASCADE,
        related_name='bookings',
        help_text=_('Request being applied to')
    )

    helper = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='helper_bookings',
        help_text=_('Member offering help')
    )

    requester = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='requester_bookings',
        help_text=_('Owner of the request')
    )

    agreed_price = models.DecimalField(
        _('agreed price'),
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[validate_non_negative_amount]
    )

    notes = models.TextField(_('notes'), blank=True, default='')

    status = models.CharField(
        _('status'),
        max_length=20,
        choices=STATUS_CHOICES,
        default=PENDING
    )

    scheduled_date = models.DateTimeField(_('scheduled date'), null=True, blank=True)

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        db_table = 'bookings'
        verbose_name = _('booking')
        verbose_name_plural = _('bookings')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['helper'], name='bookings_helper_idx'),
            models.Index(fields=['requester'], name='bookings_requester_idx'),
            models.Index(fields=['status'], name='bookings_status_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['request', 'helper'],
                name='unique_booking_per_request_helper'
            )
        ]

    def __str__(self):
        return f"Booking #{self.pk} by {self.helper} for {self.request}"

    def clean(self):
        """
        Validate application rules and status transitions.

        On creation:
        - The request must be open
        - The helper cannot apply to their own request
        - The helper cannot apply twice to the same request

        On update, status changes must follow VALID_TRANSITIONS.
        """
        super().clean()

        if not self.request_id:
            return

        if self.requester_id and self.requester_id != self.request.requester_id:
            raise ValidationError({
                'requester': _('Booking requester must be the owner of the request.')
            })

        if self._state.adding:
            if not self.request.is_open():
                raise ValidationError({
                    'request': _(
                        'Applications are only accepted for open requests. '
                        'This request is %(status)s.'
                    ) % {'status': self.request.status}
                })

            if self.helper_id and self.helper_id == self.request.requester_id:
                raise ValidationError({
                    'helper': _('You cannot apply to your own request.')
                })

            if self.helper_id and Booking.objects.filter(
                request_id=self.request_id,
                helper_id=self.helper_id
            ).exists():
                raise ValidationError({
                    'request': _('You have already applied to this request.')
                })
        else:
            old_status = (
                Booking.objects.filter(pk=self.pk).values_list('status', flat=True).first()
            )
            if old_status and old_status != self.status:
                if self.status not in self.VALID_TRANSITIONS.get(old_status, []):
                    raise ValidationError({
                        'status': _('Invalid status transition from %(old)s to %(new)s.') % {
                            'old': old_status, 'new': self.status
                        }
                    })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)

    def is_participant(self, user):
        return user is not None and user.id in (self.requester_id, self.helper_id)

    def other_party_id(self, user):
        """Id of the participant that is not ``user``."""
        return self.helper_id if user.id == self.requester_id else self.requester_id

    def can_transition_to(self, new_status):
        """
        Validate the status graph.

        Returns:
            tuple: (is_valid: bool, error_message: str or None)
        """
        current_status = self.status

        if new_status not in self.VALID_TRANSITIONS:
            valid = ', '.join(self.VALID_TRANSITIONS)
            return False, f'Invalid status. Must be one of: {valid}.'

        if current_status == new_status:
            return False, f'Booking is already {current_status}.'

        if new_status not in self.VALID_TRANSITIONS.get(current_status, []):
            return False, f'Invalid status transition from {current_status} to {new_status}.'

        return True, None

    def check_actor_permission(self, actor, new_status):
        """
        Check whether ``actor`` may move this booking to ``new_status``.

        Returns:
            tuple: (allowed: bool, error_message: str or None)
        """
        if not self.is_participant(actor):
            return False, 'You do not have permission to modify this booking.'

        if new_status in self.REQUESTER_ONLY and actor.id != self.requester_id:
            return False, f'Only the requester can mark a booking as {new_status}.'

        return True, None

    def transition_to(self, actor, new_status, scheduled_date=None, expected_status=None):
        """
        Move the booking to ``new_status`` on behalf of ``actor``.

        The write is a compare-and-set on the status this instance was loaded
        with: if another request changed it in between, nothing is written and
        BookingConflictError is raised. Callers that validated against an
        older snapshot (an API client) pass that status as ``expected_status``.

        Args:
            actor: User performing the change
            new_status: Target status
            scheduled_date: Optional datetime, only allowed when accepting
            expected_status: Status the caller believes is current

        Returns:
            Booking: self, updated in place

        Raises:
            PermissionDenied: Actor is not a participant or lacks the role
            ValidationError: Transition not in the status graph, or a schedule
                attached to anything but an accept
            BookingConflictError: The stored status changed concurrently
        """
        allowed, message = self.check_actor_permission(actor, new_status)
        if not allowed:
            logger.warning(
                f"Booking {self.pk}: {getattr(actor, 'email', actor)} denied "
                f"transition {self.status} -> {new_status}"
            )
            raise PermissionDenied(message)

        if expected_status is not None and expected_status != self.status:
            raise BookingConflictError(self.pk, expected_status)

        is_valid, message = self.can_transition_to(new_status)
        if not is_valid:
            raise ValidationError({'status': message})

        if scheduled_date is not None and new_status != self.ACCEPTED:
            raise ValidationError({
                'scheduled_date': _('A schedule can only be attached when accepting a booking.')
            })

        current_status = self.status
        updates = {'status': new_status, 'updated_at': timezone.now()}
        if scheduled_date is not None:
            updates['scheduled_date'] = scheduled_date

        with transaction.atomic():
            updated = Booking.objects.filter(
                pk=self.pk,
                status=current_status
            ).update(**updates)

            if not updated:
                raise BookingConflictError(self.pk, current_status)

            for field, value in updates.items():
                setattr(self, field, value)

            from .notifications import notify_booking_status_change
            notify_booking_status_change(self)

        logger.info(
            f"Booking {self.pk} status updated: {current_status} -> {new_status} "
            f"by {actor.email}"
        )
        return self

    def submit_review(self, reviewer, rating, comment=''):
        """
        Record ``reviewer``'s review of the other participant.

        The reviewee is the helper when the requester reviews, and the
        requester otherwise. The reviewee's rating aggregate is recomputed by
        the post_save signal inside the same transaction.

        Raises:
            PermissionDenied: Reviewer did not take part in the booking
            ValidationError: Booking not completed, rating not an integer 1-5,
                or the reviewer already reviewed this booking
        """
        if not self.is_participant(reviewer):
            raise PermissionDenied('You can only review bookings you participated in.')

        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError({'rating': _('Rating must be an integer.')})

        with transaction.atomic():
            review = Review(
                booking=self,
                reviewer=reviewer,
                reviewee_id=self.other_party_id(reviewer),
                rating=rating,
                comment=comment or ''
            )
            review.save()

        return review


class Review(models.Model):
    """
    Post-completion rating from one booking participant about the other.

    One review per (booking, reviewer), so each direction can be reviewed once.
    """

    booking = models.ForeignKey(
        Booking,
        on_delete=models.CASCADE,
        related_name='reviews',
        help_text=_('Booking being reviewed')
    )

    reviewer = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='reviews_given',
        help_text=_('Member writing the review')
    )

    reviewee = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='reviews_received',
        help_text=_('Member being reviewed')
    )

    rating = models.PositiveSmallIntegerField(
        _('rating'),
        validators=[
            MinValueValidator(1, message=_('Rating must be at least 1.')),
            MaxValueValidator(5, message=_('Rating must be at most 5.'))
        ]
    )

    comment = models.TextField(_('comment'), blank=True, default='')

    created_at = models.DateTimeField(_('created at'), auto_now_add=True)
    updated_at = models.DateTimeField(_('updated at'), auto_now=True)

    class Meta:
        db_table = 'reviews'
        verbose_name = _('review')
        verbose_name_plural = _('reviews')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['reviewee'], name='reviews_reviewee_idx'),
            models.Index(fields=['reviewer'], name='reviews_reviewer_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['booking', 'reviewer'],
                name='unique_review_per_booking_reviewer'
            )
        ]

    def __str__(self):
        return f"Review by {self.reviewer} for {self.reviewee} - {self.rating}★"

    def clean(self):
        """
        Ensures:
        - Booking is completed
        - Reviewer took part in the booking
        - Reviewee is the other participant
        - The reviewer has not already reviewed this booking
        """
        super().clean()

        if not self.booking_id:
            return

        booking = self.booking

        if booking.status != Booking.COMPLETED:
            raise ValidationError({
                'booking': _(
                    'Only completed bookings can be reviewed. This booking is %(status)s.'
                ) % {'status': booking.status}
            })

        if self.reviewer_id and self.reviewer_id not in (booking.requester_id, booking.helper_id):
            raise ValidationError({
                'reviewer': _('Reviewer must be the requester or the helper of the booking.')
            })

        if self.reviewer_id and self.reviewee_id:
            expected = (
                booking.helper_id if self.reviewer_id == booking.requester_id
                else booking.requester_id
            )
            if self.reviewee_id != expected:
                raise ValidationError({
                    'reviewee': _('Reviewee must be the other participant of the booking.')
                })

        if self._state.adding and self.reviewer_id and Review.objects.filter(
            booking_id=self.booking_id,
            reviewer_id=self.reviewer_id
        ).exists():
            raise ValidationError({
                'booking': _('You have already reviewed this booking.')
            })

    def save(self, *args, **kwargs):
        self.full_clean()
        super().save(*args, **kwargs)


class Notification(models.Model):
    """
    Message shown to a member about activity that concerns them.

    related_id points at a booking for booking_* types and at a help request
    for new_request.
    """

    BOOKING_REQUEST = 'booking_request'
    BOOKING_ACCEPTED = 'booking_accepted'
    BOOKING_DECLINED = 'booking_declined'
    NEW_REQUEST = 'new_request'
    PROFILE_UPDATE = 'profile_update'
    OTHER = 'other'

    TYPE_CHOICES = [
        (BOOKING_REQUEST, 'Booking request'),
        (BOOKING_ACCEPTED, 'Booking accepted'),
        (BOOKING_DECLINED, 'Booking declined'),
        (NEW_REQUEST, 'New request'),
        (PROFILE_UPDATE, 'Profile update'),
        (OTHER, 'Other'),
    ]

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='notifications',
        help_text=_('Member the notification is for')
    )

    type = models.CharField(
        _('type'),
        max_length=30,
        choices=TYPE_CHOICES,
        default=OTHER
    )

    title = models.CharField(_('title'), max_length=200)
    message = models.TextField(_('message'), blank=True, default='')

    related_id = models.PositiveBigIntegerField(
        _('related id'),
        null=True,
        blank=True,
        help_text=_('Booking or request id, depending on type')
    )

    is_read = models.BooleanField(_('read'), default=False)
    created_at = models.DateTimeField(_('created at'), auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        verbose_name = _('notification')
        verbose_name_plural = _('notifications')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'is_read'], name='notifications_user_read_idx'),
        ]

    def __str__(self):
        return f"{self.type}: {self.title}"

    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.save(update_fields=['is_read'])
