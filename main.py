"""Local development entrypoint.

Exposes `app` so platforms that look for `main.py` can find it without
importing the package directly.
"""

from sena_simulator import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host="127.0.0.1", port=8000, debug=False)
