#!/usr/bin/env python
"""
Record images in the gallery store and optionally dump its contents.

Usage:
  python scripts/ingest.py ~/Pictures/beach.jpg file:///sdcard/DCIM/0001.jpg
  LOCATION_MODE=static LOCATION_STATIC_LAT=37.0 LOCATION_STATIC_LON=-122.0 \
      python scripts/ingest.py ~/Pictures --list
"""
from __future__ import annotations

import argparse
import asyncio
import sys

from geo_gallery.core.env import configure_logging, load_dotenv_if_present
from geo_gallery.core.errors import WriteFailed
from geo_gallery.gallery import GalleryController
from geo_gallery.ingest import to_uri


async def run(targets: list[str], show_rows: bool) -> int:
    controller = GalleryController.from_env()
    await controller.start()
    try:
        uris = [uri for target in targets for uri in to_uri(target)]
        for uri in uris:
            try:
                record = await controller.acquire(uri)
            except WriteFailed as exc:
                print(f"Not saved: {uri} ({exc})", file=sys.stderr)
                return 1
            location = (
                f"{record.latitude}, {record.longitude}" if record.is_geotagged else "no location"
            )
            print(f"[{record.id}] {record.uri} @ {record.timestamp} ({location})")
        if targets and not uris:
            print("No supported images found")
        if show_rows:
            for record in await controller.store.list_all():
                print(record.model_dump_json())
        projection = controller.projection
        print(f"Gallery: {len(projection.gallery)} images, {len(projection.markers)} on the map")
    finally:
        await controller.close()
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Record images in the gallery store.")
    parser.add_argument("targets", nargs="*", help="Image files, directories, or URIs")
    parser.add_argument("--list", action="store_true", help="Print every stored record")
    args = parser.parse_args()

    load_dotenv_if_present()
    configure_logging()
    sys.exit(asyncio.run(run(args.targets, args.list)))


if __name__ == "__main__":
    main()
