"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TOKEN_SECRET", "test-secret")

# Ensure learnhub_backend is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from .fixtures import *  # noqa: E402,F401,F403
