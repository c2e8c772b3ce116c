# -*- coding: utf-8 -*-
"""Test settings; must be applied before anything imports fittrack.config."""

import os
import tempfile
from pathlib import Path

_TMP = Path(tempfile.mkdtemp(prefix="fittrack-test-"))

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP / 'fittrack.db'}"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["DEBUG"] = "true"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["UPLOAD_DIR"] = str(_TMP / "uploads")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["TZ"] = "UTC"
os.environ["GOOGLE_API_KEY"] = ""
os.environ["OPENROUTER_API_KEY"] = ""
