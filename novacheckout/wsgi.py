"""
WSGI config for the novacheckout project.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'novacheckout.settings')

application = get_wsgi_application()
