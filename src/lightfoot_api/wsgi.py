"""WSGI entrypoint: `gunicorn lightfoot_api.wsgi:app` or `flask --app lightfoot_api.wsgi run`."""

from lightfoot_api.app import create_app

app = create_app()
