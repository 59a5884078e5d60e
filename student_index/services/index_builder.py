from __future__ import annotations

import json
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import PurePath

from student_index.config import INDEX_FILENAME, SCHEMA_VERSION, SETS_DIRNAME, STUDENTS_SUBPATH
from student_index.schemas import IndexDocument, SetEntry
from student_index.services.filesystem import FileSystem, LocalFileSystem, display_name

Clock = Callable[[], datetime]

_YYMMDD_RE = re.compile(r"[0-9]{6}")
_JSON_SUFFIX = ".json"


def yymmdd_to_date(stem: str) -> str | None:
    """'260114' -> '2026-01-14'. Years are always 20YY; only month/day ranges are checked."""
    if not _YYMMDD_RE.fullmatch(stem):
        return None
    yy = int(stem[0:2])
    mm = int(stem[2:4])
    dd = int(stem[4:6])
    if mm < 1 or mm > 12 or dd < 1 or dd > 31:
        return None
    return f"{2000 + yy}-{mm:02d}-{dd:02d}"


def is_set_filename(name: str) -> bool:
    return name.lower().endswith(_JSON_SUFFIX)


def _rank_key(entry: SetEntry) -> tuple[int, str]:
    if entry.date is not None:
        return (1, entry.date)
    return (0, entry.yy_mm_dd)


def rank_entries(entries: Iterable[SetEntry]) -> list[SetEntry]:
    # Dated entries first (latest date on top), then undated by stem, descending.
    return sorted(entries, key=_rank_key, reverse=True)


def build_entry(prefix: str, student_id: str, filename: str) -> SetEntry:
    stem = filename[: -len(_JSON_SUFFIX)]
    date = yymmdd_to_date(stem)
    return SetEntry(
        yy_mm_dd=stem,
        date=date,
        label=date if date is not None else stem,
        path="/".join([*STUDENTS_SUBPATH, prefix, student_id, SETS_DIRNAME, filename]),
    )


def format_generated_at(moment: datetime) -> str:
    moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def utc_now() -> datetime:
    return datetime.now(UTC)


def write_index(fs: FileSystem, out_path: PurePath, document: IndexDocument) -> None:
    fs.make_dirs(out_path.parent)
    text = json.dumps(document.to_payload(), ensure_ascii=False, indent=2) + "\n"
    fs.write_text(out_path, text)


@dataclass
class StudentIndexResult:
    prefix: str
    student_id: str
    count: int
    rel_path: str


@dataclass
class BuildSuccess:
    students_dir_found: bool
    students: list[StudentIndexResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return True

    @property
    def total(self) -> int:
        return len(self.students)


@dataclass
class BuildFailure:
    cause: OSError
    students: list[StudentIndexResult] = field(default_factory=list)
    failed_student: str | None = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def total(self) -> int:
        return len(self.students)


BuildResult = BuildSuccess | BuildFailure


class StudentIndexBuilder:
    def __init__(self, root: PurePath, fs: FileSystem | None = None, clock: Clock | None = None) -> None:
        self.root = root
        self.students_dir = root.joinpath(*STUDENTS_SUBPATH)
        self.fs = fs or LocalFileSystem()
        self.clock = clock or utc_now

    def build_student(self, prefix: str, student_id: str) -> StudentIndexResult:
        student_dir = self.students_dir / prefix / student_id
        sets_dir = student_dir / SETS_DIRNAME

        # Raw names address the disk; decoded names go into the document.
        shown_prefix = display_name(prefix)
        shown_id = display_name(student_id)
        files = [display_name(name) for name in self.fs.list_files(sets_dir) if is_set_filename(name)]
        items = rank_entries(build_entry(shown_prefix, shown_id, name) for name in files)

        document = IndexDocument(
            schema_version=SCHEMA_VERSION,
            student_id=shown_id,
            generated_at=format_generated_at(self.clock()),
            sets=items,
        )
        out_path = student_dir / INDEX_FILENAME
        write_index(self.fs, out_path, document)

        rel_path = "/".join([*STUDENTS_SUBPATH, shown_prefix, shown_id, INDEX_FILENAME])
        return StudentIndexResult(
            prefix=shown_prefix,
            student_id=shown_id,
            count=len(items),
            rel_path=rel_path,
        )

    def run(self) -> BuildResult:
        if not self.fs.exists(self.students_dir):
            return BuildSuccess(students_dir_found=False)

        done: list[StudentIndexResult] = []
        current: str | None = None
        try:
            for prefix in self.fs.list_dirs(self.students_dir):
                prefix_dir = self.students_dir / prefix
                for student_id in self.fs.list_dirs(prefix_dir):
                    if not self.fs.exists(prefix_dir / student_id / SETS_DIRNAME):
                        continue
                    current = display_name(student_id)
                    done.append(self.build_student(prefix, student_id))
                    current = None
        except OSError as e:
            return BuildFailure(cause=e, students=done, failed_student=current)

        return BuildSuccess(students_dir_found=True, students=done)
