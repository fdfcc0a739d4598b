"""
Discovery: skill-matched requests, trending skills and recent members.
"""

from collections import Counter

from django.db.models import Q

from .models import HelpRequest, Profile


def matching_requests(user, limit=6):
    """
    Open requests needing one of ``user``'s skills, newest first.

    Skill names match case-insensitively. The user's own requests are
    excluded. A user without skills gets an empty list.
    """
    skill_names = user.skill_names()
    if not skill_names:
        return []

    skill_filter = Q()
    for name in skill_names:
        skill_filter |= Q(skill_needed__iexact=name)

    return list(
        HelpRequest.objects
        .filter(skill_filter, status=HelpRequest.OPEN)
        .exclude(requester=user)
        .select_related('requester__profile')
        .order_by('-created_at', '-id')[:limit]
    )


def tally_skills(names):
    """
    Count skill names, most frequent first.

    Ties keep first-seen order.

    >>> tally_skills(['plumbing', 'plumbing', 'tutoring'])
    [('plumbing', 2), ('tutoring', 1)]
    """
    return Counter(names).most_common()


def trending_skills(sample_size=100, top=5):
    """Most requested skills among the newest ``sample_size`` open requests."""
    names = (
        HelpRequest.objects
        .filter(status=HelpRequest.OPEN)
        .order_by('-created_at', '-id')
        .values_list('skill_needed', flat=True)[:sample_size]
    )
    return tally_skills(names)[:top]


def recent_members(user=None, limit=6):
    profiles = Profile.objects.select_related('user').order_by('-created_at', '-user_id')
    if user is not None:
        profiles = profiles.exclude(user=user)
    return list(profiles[:limit])
