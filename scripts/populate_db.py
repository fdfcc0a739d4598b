import os
import sys
import django
import random
from decimal import Decimal
from datetime import timedelta
from django.utils import timezone
from faker import Faker

# Add project root to Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set up Django environment
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'community_help.settings')
django.setup()

from django.core.exceptions import ValidationError

from marketplace.models import (
    User, Profile, Skill, UserSkill, HelpRequest, Booking
)

fake = Faker()

SKILLS = {
    'Home': ['Plumbing', 'Electrical', 'Carpentry', 'Painting', 'Cleaning'],
    'Outdoors': ['Gardening', 'Lawn Mowing', 'Snow Removal'],
    'Education': ['Tutoring', 'Language Lessons', 'Music Lessons'],
    'Tech': ['Computer Repair', 'Web Design', 'Phone Setup'],
    'Errands': ['Moving Help', 'Grocery Delivery', 'Pet Sitting'],
}


def create_skills():
    print("Creating skills...")
    skills = []
    for category, names in SKILLS.items():
        for name in names:
            skill, _ = Skill.objects.get_or_create(name=name, defaults={'category': category})
            skills.append(skill)
    print(f"{len(skills)} skills available.")
    return skills


def create_users(num_users=25):
    print(f"Creating {num_users} members...")

    users = []
    for _ in range(num_users):
        email = fake.unique.email()
        user = User.objects.create_user(
            username=email.split('@')[0],
            email=email,
            password='password123',
            first_name=fake.first_name(),
            last_name=fake.last_name()
        )

        profile = user.profile
        profile.display_name = f"{user.first_name} {user.last_name}"
        profile.bio = fake.paragraph(nb_sentences=2)
        profile.location = fake.city()
        profile.is_available = random.random() > 0.2
        profile.save()

        users.append(user)

    print(f"Created {len(users)} members.")
    return users


def assign_skills(users, skills):
    print("Assigning skills...")
    count = 0
    levels = [choice for choice, _ in UserSkill.EXPERIENCE_LEVEL_CHOICES]

    for user in users:
        for skill in random.sample(skills, random.randint(0, 4)):
            UserSkill.objects.create(
                user=user,
                skill=skill,
                experience_level=random.choice(levels),
                hourly_rate=Decimal(random.randint(10, 80)) if random.random() > 0.3 else None
            )
            count += 1

    print(f"Assigned {count} user skills.")


def create_requests(users, skills, num_requests=40):
    print(f"Creating {num_requests} help requests...")
    requests = []
    urgencies = [choice for choice, _ in HelpRequest.URGENCY_CHOICES]

    for _ in range(num_requests):
        skill = random.choice(skills)
        budget_min = Decimal(random.randint(10, 50)) if random.random() > 0.3 else None
        budget_max = (
            (budget_min or Decimal('0')) + Decimal(random.randint(10, 100))
            if random.random() > 0.3 else None
        )

        help_request = HelpRequest.objects.create(
            requester=random.choice(users),
            title=f"Need help with {skill.name.lower()}",
            description=fake.paragraph(nb_sentences=3),
            skill_needed=skill.name,
            location=fake.city(),
            budget_min=budget_min,
            budget_max=budget_max,
            urgency=random.choice(urgencies)
        )
        requests.append(help_request)

    print(f"Created {len(requests)} help requests.")
    return requests


def create_bookings(users, requests):
    print("Creating bookings...")
    bookings = []

    for help_request in requests:
        helpers = [u for u in users if u.id != help_request.requester_id]
        for helper in random.sample(helpers, random.randint(0, 3)):
            try:
                booking = help_request.apply(
                    helper,
                    agreed_price=help_request.suggested_price,
                    notes=fake.sentence()
                )
            except ValidationError:
                continue

            outcome = random.choice(['pending', 'accepted', 'declined', 'completed', 'cancelled'])
            requester = help_request.requester

            if outcome in ('accepted', 'completed'):
                booking.transition_to(
                    requester,
                    Booking.ACCEPTED,
                    scheduled_date=timezone.now() + timedelta(days=random.randint(1, 30))
                )
            elif outcome == 'declined':
                booking.transition_to(requester, Booking.DECLINED)
            elif outcome == 'cancelled':
                booking.transition_to(helper, Booking.CANCELLED)

            if outcome == 'completed':
                booking.transition_to(helper, Booking.COMPLETED)

            bookings.append(booking)

    print(f"Created {len(bookings)} bookings.")
    return bookings


def create_reviews(bookings):
    print("Creating reviews...")
    count = 0

    for booking in bookings:
        if booking.status != Booking.COMPLETED:
            continue

        for reviewer in (booking.requester, booking.helper):
            if random.random() > 0.7:
                continue
            booking.submit_review(
                reviewer,
                random.randint(1, 5),
                fake.sentence()
            )
            count += 1

    print(f"Created {count} reviews.")


def main():
    print("Starting database population...")

    skills = create_skills()
    users = create_users(num_users=25)
    assign_skills(users, skills)

    requests = create_requests(users, skills, num_requests=40)
    bookings = create_bookings(users, requests)
    create_reviews(bookings)

    print(f"Profiles: {Profile.objects.count()}")
    print("Database population completed successfully!")


if __name__ == '__main__':
    main()
