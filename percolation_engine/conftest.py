# conftest.py
#
# Ensures that the repository root is on sys.path when pytest is invoked from
# inside the package directory, so "import percolation_engine" and the
# top-level "runner" wrapper resolve without requiring a package install.
#
# Usage:
#   pytest percolation_engine/tests -v
#   cd percolation_engine/ && pytest tests/test_percolation.py -v

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))
