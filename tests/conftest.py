"""Makes the sources importable when the tests are run from a checkout
without installing the package first (`pip install -e .` makes this a
no-op)."""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src" / "py"))

# EOF
