"""
WSGI / Flask CLI entry point.

Usage:
    flask --app wsgi run
    flask --app wsgi seed          # demo rows into empty tables
    flask --app wsgi db migrate -m "description"
    flask --app wsgi db upgrade
"""

from tessellate import create_app

app = create_app()
