"""
Signal receivers that keep derived data in sync.

- Every new user gets a Profile
- Saving or deleting a Review recomputes the reviewee's rating aggregate
- New bookings and new requests emit notifications
"""

import logging

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import Booking, HelpRequest, Profile, Review, User
from .notifications import notify_booking_request, notify_new_request

logger = logging.getLogger(__name__)


@receiver(post_save, sender=User)
def create_profile_for_new_user(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        max_length = Profile._meta.get_field('display_name').max_length
        local_part = instance.email.split('@')[0] if instance.email else ''
        Profile.objects.get_or_create(
            user=instance,
            defaults={'display_name': local_part[:max_length]}
        )


def _recalculate_reviewee_rating(review):
    profile = Profile.objects.select_for_update().filter(pk=review.reviewee_id).first()
    if profile is None:
        # Reviewee is being deleted along with their profile
        return None
    return profile.recalculate_rating()


@receiver(post_save, sender=Review)
def update_rating_on_review_save(sender, instance, created, raw=False, **kwargs):
    """
    Recompute the reviewee's rating and review count after a review is saved.

    Runs inside the caller's transaction, so a failure here rolls back the
    review insert as well and the aggregate never drifts from the reviews.
    """
    if raw:
        return

    try:
        with transaction.atomic():
            result = _recalculate_reviewee_rating(instance)

        if result is not None:
            rating, total = result
            action = "created" if created else "updated"
            logger.info(
                f"Updated rating for review {instance.id} ({action}): "
                f"reviewee_id={instance.reviewee_id}, rating={rating:.2f}, total_reviews={total}"
            )

    except Exception as e:
        logger.error(
            f"Error updating rating for review {instance.id}: {e}",
            exc_info=True
        )
        raise


@receiver(post_delete, sender=Review)
def update_rating_on_review_delete(sender, instance, **kwargs):
    """Recompute the reviewee's aggregate without the deleted review."""
    try:
        with transaction.atomic():
            result = _recalculate_reviewee_rating(instance)

        if result is not None:
            logger.info(
                f"Updated rating after deleting review {instance.id}: "
                f"reviewee_id={instance.reviewee_id}, rating={result[0]:.2f}, total_reviews={result[1]}"
            )

    except Exception as e:
        logger.error(
            f"Error updating rating after deleting review {instance.id}: {e}",
            exc_info=True
        )
        raise


@receiver(post_save, sender=Booking)
def notify_requester_on_application(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        notify_booking_request(instance)


@receiver(post_save, sender=HelpRequest)
def notify_skilled_members_on_new_request(sender, instance, created, raw=False, **kwargs):
    if created and not raw:
        notify_new_request(instance)
