"""
pytest configuration for the dnsstamp tests.

Registers Hypothesis profiles; pick one with HYPOTHESIS_PROFILE
(default, ci, dev).
"""

import os
import sys
from pathlib import Path

from hypothesis import settings

sys.path.insert(0, str(Path(__file__).parent.parent))

# Default profile: balanced speed and coverage
settings.register_profile(
    "default",
    max_examples=200,
    deadline=None,
)

# CI profile: more thorough testing
settings.register_profile(
    "ci",
    max_examples=1000,
    deadline=None,
)

# Dev profile: fast iteration
settings.register_profile(
    "dev",
    max_examples=20,
    deadline=None,
)

settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "default"))
