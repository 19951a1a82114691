"""Entry point for the Centivo Users API.

This script connects to MongoDB and then serves the HTTP API with
uvicorn.  It is intended to be executed from the project root, for
example under Docker, where you only specify a single Python file to
run.

Configuration such as MONGO_URL, MONGO_DB_NAME, HOST and PORT is read
from the environment.  Defaults are ``mongodb://localhost:27017``,
``Centivo``, ``0.0.0.0`` and ``3000``.

Usage:
    python run.py
"""
from centivo_users_api.app.server import main


if __name__ == "__main__":
    main()
