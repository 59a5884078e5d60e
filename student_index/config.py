from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv

load_dotenv(Path.cwd() / ".env")

SCHEMA_VERSION = 1
STUDENTS_SUBPATH = ("data", "students")
SETS_DIRNAME = "sets"
INDEX_FILENAME = "index.json"


@dataclass(frozen=True)
class Settings:
    root_dir: str = field(default_factory=lambda: os.getenv("STUDENT_INDEX_ROOT", ""))

    def resolve_root(self, override: str | None = None) -> Path:
        raw = (override or self.root_dir or "").strip()
        return Path(raw) if raw else Path.cwd()


settings = Settings()
