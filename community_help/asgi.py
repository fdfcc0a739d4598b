"""
ASGI config for the community_help project.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'community_help.settings')

application = get_asgi_application()
