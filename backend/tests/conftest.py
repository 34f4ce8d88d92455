"""
Point the app at a throwaway in-memory SQLite database and create the
schema. Runs before any test module loads, so liftlog.db sees the URL.
"""
import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("SECRET_KEY", "test-secret")

from liftlog.db import Base, engine  # noqa: E402
from liftlog import models  # noqa: E402,F401

Base.metadata.create_all(engine)
