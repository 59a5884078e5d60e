#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

# Allow running as: python scripts/build_student_index.py
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from student_index.cli import main


if __name__ == "__main__":
    main()
