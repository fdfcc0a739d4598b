"""
Notification dispatch and queries.

Rows are created from signal receivers and from Booking.transition_to(); the
API only lists them and marks them read.
"""

import logging

from .models import Booking, Notification, User

logger = logging.getLogger(__name__)

UNREAD_FEED_SIZE = 5


def notify(user_id, type, title, message='', related_id=None):
    notification = Notification.objects.create(
        user_id=user_id,
        type=type,
        title=title,
        message=message,
        related_id=related_id
    )
    logger.debug(f"Notification {notification.id} ({type}) created for user {user_id}")
    return notification


def notify_booking_request(booking):
    """Tell the requester a helper applied."""
    helper_name = booking.helper.display_name
    return notify(
        booking.requester_id,
        Notification.BOOKING_REQUEST,
        'New application for your request',
        f'{helper_name} offered to help with "{booking.request.title}".',
        related_id=booking.id
    )


def notify_booking_status_change(booking):
    """
    Tell the helper their application was accepted or declined.

    Other transitions produce no notification.
    """
    if booking.status == Booking.ACCEPTED:
        type = Notification.BOOKING_ACCEPTED
        title = 'Your application was accepted'
    elif booking.status == Booking.DECLINED:
        type = Notification.BOOKING_DECLINED
        title = 'Your application was declined'
    else:
        return None

    return notify(
        booking.helper_id,
        type,
        title,
        f'Request: "{booking.request.title}".',
        related_id=booking.id
    )


def notify_new_request(help_request):
    """
    Tell every other member who lists the needed skill about a new request.

    Returns:
        int: Number of notifications created
    """
    recipients = (
        User.objects
        .filter(user_skills__skill__name__iexact=help_request.skill_needed)
        .exclude(pk=help_request.requester_id)
        .distinct()
        .values_list('pk', flat=True)
    )

    notifications = [
        Notification(
            user_id=user_id,
            type=Notification.NEW_REQUEST,
            title=f'New {help_request.skill_needed} request',
            message=help_request.title,
            related_id=help_request.id
        )
        for user_id in recipients
    ]
    Notification.objects.bulk_create(notifications)

    if notifications:
        logger.info(
            f"Request {help_request.id}: notified {len(notifications)} "
            f"member(s) with skill {help_request.skill_needed}"
        )
    return len(notifications)


def list_and_mark_read(user):
    """
    Return all of ``user``'s notifications newest first, then mark them read.

    The returned list reflects the state before marking.
    """
    notifications = list(Notification.objects.filter(user=user))
    unread_ids = [n.id for n in notifications if not n.is_read]
    if unread_ids:
        Notification.objects.filter(pk__in=unread_ids).update(is_read=True)
    return notifications


def unread_feed(user, limit=UNREAD_FEED_SIZE):
    """
    Returns:
        tuple: (newest unread notifications up to limit, total unread count)
    """
    unread = Notification.objects.filter(user=user, is_read=False)
    return list(unread[:limit]), unread.count()


def mark_read(user, notification_id):
    """
    Mark one of ``user``'s notifications read.

    Raises:
        Notification.DoesNotExist: If the id is unknown or owned by someone else
    """
    notification = Notification.objects.get(pk=notification_id, user=user)
    notification.mark_as_read()
    return notification
