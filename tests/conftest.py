"""
Pytest configuration for Intcode tests.
"""
import sys
import os

import pytest

# Make `import intcode` work without installing the package
_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
_SRC_DIR = os.path.join(_ROOT, 'src')

if _SRC_DIR not in sys.path:
	sys.path.insert(0, _SRC_DIR)

from intcode.config import IntcodeConfig, reset_config  # noqa: E402


@pytest.fixture(autouse=True)
def default_config():
	"""Every test starts from the built-in defaults, not the caller's environment."""
	config = reset_config(IntcodeConfig())
	yield config
	reset_config(IntcodeConfig())
