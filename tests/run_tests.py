"""Run the smskpi unittest suite from a checkout or an installed package."""
import os
import sys
import tempfile
import unittest
import importlib.util
from pathlib import Path

TESTS_DIR = Path(__file__).parent

if importlib.util.find_spec("smskpi") is None:
    # Uninstalled checkout
    sys.path.insert(0, str(TESTS_DIR.parent / "src"))


def main() -> int:
    with tempfile.TemporaryDirectory(prefix="smskpi-tests-") as log_dir:
        # Module-level loggers are created on import; keep their files out of $HOME
        os.environ.setdefault("SMSKPI_LOG_DIR", log_dir)
        suite = unittest.TestLoader().discover(str(TESTS_DIR), pattern="test_*.py")
        result = unittest.TextTestRunner(verbosity=2).run(suite)
        return 0 if result.wasSuccessful() else 1


if __name__ == "__main__":
    sys.exit(main())
