# Recalculate Ratings Management Command
from django.core.management.base import BaseCommand, CommandError
from django.db.models import Count, Sum

from marketplace.models import Profile, Review


class Command(BaseCommand):
    help = 'Recalculates every profile rating and review count from the stored reviews.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report differences without saving changes to the database.',
        )
        parser.add_argument(
            '--batch-size',
            type=int,
            default=1000,
            help='Batch size for bulk processing.',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        batch_size = options['batch_size']

        if batch_size < 1:
            raise CommandError('--batch-size must be a positive integer.')

        changed = self.recalculate_profiles(dry_run, batch_size)

        if dry_run:
            self.stdout.write(self.style.SUCCESS(
                f'Dry run completed. {changed} profile(s) would change. No changes saved.'
            ))
        else:
            self.stdout.write(self.style.SUCCESS(
                f'Recalculation completed successfully. {changed} profile(s) updated.'
            ))

    def recalculate_profiles(self, dry_run, batch_size):
        self.stdout.write('Recalculating profile ratings...')

        stats = {
            row['reviewee_id']: (row['total'], row['count'])
            for row in Review.objects.values('reviewee_id').annotate(
                total=Sum('rating'),
                count=Count('id')
            )
        }

        profiles = Profile.objects.all().iterator(chunk_size=batch_size)
        updates = []
        count = 0
        changed = 0

        for profile in profiles:
            total, review_count = stats.get(profile.user_id, (0, 0))
            new_rating = total / review_count if review_count else 0.0

            if abs(profile.rating - new_rating) > 1e-9 or profile.total_reviews != review_count:
                if dry_run:
                    self.stdout.write(
                        f'  [DRY-RUN] Profile {profile.user_id} ({profile}): '
                        f'Rating {profile.rating:.2f} -> {new_rating:.2f}, '
                        f'Count {profile.total_reviews} -> {review_count}'
                    )
                profile.rating = new_rating
                profile.total_reviews = review_count
                updates.append(profile)
                changed += 1

            if len(updates) >= batch_size:
                if not dry_run:
                    Profile.objects.bulk_update(updates, ['rating', 'total_reviews'])
                updates = []

            count += 1
            if count % 100 == 0:
                self.stdout.write(f'Processed {count} profiles...')

        if updates and not dry_run:
            Profile.objects.bulk_update(updates, ['rating', 'total_reviews'])

        self.stdout.write(f'Processed {count} profiles total.')
        return changed
