import sys
from pathlib import Path

# Resolve the src/ tree no matter where pytest is run from
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))
