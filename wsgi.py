"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 1 --threads 4 -b 0.0.0.0:8000 wsgi:app

Keep a single worker process: history and simulation jobs live in memory.
"""

from sena_simulator import create_app

app = create_app()
