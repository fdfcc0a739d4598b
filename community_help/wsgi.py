"""
WSGI config for the community_help project.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'community_help.settings')

application = get_wsgi_application()
