from __future__ import annotations

import argparse
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replace the tour_info price catalog with the rows of a CSV file."
    )
    parser.add_argument(
        "csv_path",
        nargs="?",
        default="tour_info.csv",
        help="Catalog file: seq, tour name, service, price[, note]; comma or semicolon separated.",
    )
    parser.add_argument(
        "--env-file",
        default=os.path.join(SCRIPT_DIR, "..", ".env"),
        help="Path to .env file.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    # Settings are read on first use, so import after the .env is loaded.
    from tourdesk.core.logging import configure_logging
    from tourdesk.repositories.tour_info_repository import TourInfoRepository
    from tourdesk.services.tour_info_service import TourInfoService, read_catalog_rows

    configure_logging(os.environ.get("LOG_LEVEL"))
    with open(args.csv_path, "r", encoding="utf-8", newline="") as csv_file:
        rows = read_catalog_rows(csv_file.read())
    print(f"Found {len(rows)} rows to import")

    service = TourInfoService(repository=TourInfoRepository())
    result = service.replace_catalog(rows)
    print(
        f"Imported {result.imported} tour info record(s) "
        f"({result.skipped} skipped, {result.failed} failed)"
    )


if __name__ == "__main__":
    main()
