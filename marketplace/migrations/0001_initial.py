import django.contrib.auth.models
import django.contrib.auth.validators
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
import marketplace.validators
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('email', models.EmailField(error_messages={'unique': 'A user with that email already exists.'}, help_text='Required. Enter a valid email address.', max_length=254, unique=True, verbose_name='email address')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['email'], name='marketplace_user_email_idx')],
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Skill',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='name')),
                ('category', models.CharField(max_length=100, verbose_name='category')),
            ],
            options={
                'verbose_name': 'skill',
                'verbose_name_plural': 'skills',
                'db_table': 'skills',
                'ordering': ['category', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Profile',
            fields=[
                ('user', models.OneToOneField(help_text='User this profile belongs to', on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='profile', serialize=False, to=settings.AUTH_USER_MODEL)),
                ('display_name', models.CharField(blank=True, default='', max_length=100, verbose_name='display name')),
                ('bio', models.TextField(blank=True, default='', verbose_name='bio')),
                ('location', models.CharField(blank=True, default='', max_length=200, verbose_name='location')),
                ('phone', models.CharField(blank=True, default='', help_text='Optional. Enter phone number in international format.', max_length=20, validators=[marketplace.validators.validate_phone_number], verbose_name='phone')),
                ('avatar_url', models.URLField(blank=True, default='', help_text='Link to an externally hosted avatar image', max_length=500, verbose_name='avatar URL')),
                ('is_available', models.BooleanField(default=True, help_text='Whether the member is currently available to help', verbose_name='available')),
                ('rating', models.FloatField(default=0.0, help_text='Average rating received from reviews', validators=[django.core.validators.MinValueValidator(0.0, message='Rating cannot be negative.'), django.core.validators.MaxValueValidator(5.0, message='Rating cannot exceed 5.')], verbose_name='rating')),
                ('total_reviews', models.PositiveIntegerField(default=0, help_text='Number of reviews received', verbose_name='total reviews')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
            ],
            options={
                'verbose_name': 'profile',
                'verbose_name_plural': 'profiles',
                'db_table': 'profiles',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_available'], name='profiles_available_idx'),
                    models.Index(fields=['rating'], name='profiles_rating_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='UserSkill',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('experience_level', models.CharField(choices=[('beginner', 'Beginner'), ('intermediate', 'Intermediate'), ('advanced', 'Advanced'), ('expert', 'Expert')], max_length=20, verbose_name='experience level')),
                ('hourly_rate', models.DecimalField(blank=True, decimal_places=2, help_text='Optional hourly rate in USD', max_digits=10, null=True, validators=[marketplace.validators.validate_non_negative_amount], verbose_name='hourly rate')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('skill', models.ForeignKey(help_text='Skill being offered', on_delete=django.db.models.deletion.CASCADE, related_name='user_skills', to='marketplace.skill')),
                ('user', models.ForeignKey(help_text='Member offering the skill', on_delete=django.db.models.deletion.CASCADE, related_name='user_skills', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'user skill',
                'verbose_name_plural': 'user skills',
                'db_table': 'user_skills',
                'ordering': ['skill__category', 'skill__name'],
                'constraints': [models.UniqueConstraint(fields=('user', 'skill'), name='unique_user_skill')],
            },
        ),
        migrations.CreateModel(
            name='HelpRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200, validators=[marketplace.validators.validate_not_blank], verbose_name='title')),
                ('description', models.TextField(validators=[marketplace.validators.validate_not_blank], verbose_name='description')),
                ('skill_needed', models.CharField(max_length=100, validators=[marketplace.validators.validate_not_blank], verbose_name='skill needed')),
                ('location', models.CharField(blank=True, default='', max_length=200, verbose_name='location')),
                ('budget_min', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[marketplace.validators.validate_non_negative_amount], verbose_name='minimum budget')),
                ('budget_max', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[marketplace.validators.validate_non_negative_amount], verbose_name='maximum budget')),
                ('urgency', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('urgent', 'Urgent')], default='medium', max_length=10, verbose_name='urgency')),
                ('status', models.CharField(choices=[('open', 'Open'), ('closed', 'Closed'), ('completed', 'Completed')], default='open', max_length=10, verbose_name='status')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('requester', models.ForeignKey(help_text='Member asking for help', on_delete=django.db.models.deletion.CASCADE, related_name='help_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'help request',
                'verbose_name_plural': 'help requests',
                'db_table': 'requests',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['requester'], name='requests_requester_idx'),
                    models.Index(fields=['status'], name='requests_status_idx'),
                    models.Index(fields=['skill_needed'], name='requests_skill_idx'),
                    models.Index(fields=['urgency'], name='requests_urgency_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('agreed_price', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[marketplace.validators.validate_non_negative_amount], verbose_name='agreed price')),
                ('notes', models.TextField(blank=True, default='', verbose_name='notes')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('declined', 'Declined'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='pending', max_length=20, verbose_name='status')),
                ('scheduled_date', models.DateTimeField(blank=True, null=True, verbose_name='scheduled date')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('helper', models.ForeignKey(help_text='Member offering help', on_delete=django.db.models.deletion.CASCADE, related_name='helper_bookings', to=settings.AUTH_USER_MODEL)),
                ('request', models.ForeignKey(help_text='Request being applied to', on_delete=django.db.models.deletion.CASCADE, related_name='bookings', to='marketplace.helprequest')),
                ('requester', models.ForeignKey(help_text='Owner of the request', on_delete=django.db.models.deletion.CASCADE, related_name='requester_bookings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'booking',
                'verbose_name_plural': 'bookings',
                'db_table': 'bookings',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['helper'], name='bookings_helper_idx'),
                    models.Index(fields=['requester'], name='bookings_requester_idx'),
                    models.Index(fields=['status'], name='bookings_status_idx'),
                ],
                'constraints': [models.UniqueConstraint(fields=('request', 'helper'), name='unique_booking_per_request_helper')],
            },
        ),
        migrations.CreateModel(
            name='Review',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('rating', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1, message='Rating must be at least 1.'), django.core.validators.MaxValueValidator(5, message='Rating must be at most 5.')], verbose_name='rating')),
                ('comment', models.TextField(blank=True, default='', verbose_name='comment')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='updated at')),
                ('booking', models.ForeignKey(help_text='Booking being reviewed', on_delete=django.db.models.deletion.CASCADE, related_name='reviews', to='marketplace.booking')),
                ('reviewee', models.ForeignKey(help_text='Member being reviewed', on_delete=django.db.models.deletion.CASCADE, related_name='reviews_received', to=settings.AUTH_USER_MODEL)),
                ('reviewer', models.ForeignKey(help_text='Member writing the review', on_delete=django.db.models.deletion.CASCADE, related_name='reviews_given', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'review',
                'verbose_name_plural': 'reviews',
                'db_table': 'reviews',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['reviewee'], name='reviews_reviewee_idx'),
                    models.Index(fields=['reviewer'], name='reviews_reviewer_idx'),
                ],
                'constraints': [models.UniqueConstraint(fields=('booking', 'reviewer'), name='unique_review_per_booking_reviewer')],
            },
        ),
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('booking_request', 'Booking request'), ('booking_accepted', 'Booking accepted'), ('booking_declined', 'Booking declined'), ('new_request', 'New request'), ('profile_update', 'Profile update'), ('other', 'Other')], default='other', max_length=30, verbose_name='type')),
                ('title', models.CharField(max_length=200, verbose_name='title')),
                ('message', models.TextField(blank=True, default='', verbose_name='message')),
                ('related_id', models.PositiveBigIntegerField(blank=True, help_text='Booking or request id, depending on type', null=True, verbose_name='related id')),
                ('is_read', models.BooleanField(default=False, verbose_name='read')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='created at')),
                ('user', models.ForeignKey(help_text='Member the notification is for', on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'notification',
                'verbose_name_plural': 'notifications',
                'db_table': 'notifications',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['user', 'is_read'], name='notifications_user_read_idx')],
            },
        ),
    ]
