from __future__ import annotations

import argparse

from student_index.config import settings
from student_index.services.index_builder import BuildFailure, StudentIndexBuilder


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Rebuild data/students/<prefix>/<studentId>/index.json files")
    parser.add_argument("--root", default=None, help="project root containing data/students (default: cwd)")
    args = parser.parse_args(argv)

    builder = StudentIndexBuilder(settings.resolve_root(args.root))
    result = builder.run()

    for item in result.students:
        print(f"✅ {item.student_id}: {item.count} sets -> {item.rel_path}")

    if isinstance(result, BuildFailure):
        where = f" (student={result.failed_student})" if result.failed_student else ""
        raise SystemExit(f"failed{where}: {result.cause}")

    if not result.students_dir_found:
        print("No data/students directory. Nothing to do.")
        return

    print(f"Done. Students processed: {result.total}")


if __name__ == "__main__":
    main()
