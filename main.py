import asyncio
import sys
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd
from loguru import logger

from shopfinder.clients import MapboxClient
from shopfinder.config import INPUT_CSV, OUTPUT_CSV, LOG_LEVEL
from shopfinder.errors import ShopFinderError
from shopfinder.geolocation import GeolocationProvider, StaticGeolocation, geolocation_from_env
from shopfinder.history import SessionHistory
from shopfinder.models import ResolvedRecord
from shopfinder.resolvers.pipeline_orchestrator import process_upload
from shopfinder.uploads import load_upload


@dataclass
class UploadJob:
    """One image to process, with the position of the user who took it."""
    image_path: str
    geolocation: GeolocationProvider


def load_jobs_from_csv(file_path: str) -> List[UploadJob]:
    """
    Load image jobs from a CSV manifest.

    Expected columns: `image_path`, and optionally `latitude` / `longitude`.
    Rows without a position use the environment's geolocation (or none).
    """
    df = pd.read_csv(file_path)
    default_geolocation = geolocation_from_env()
    jobs = []
    for _, row in df.iterrows():
        def safe_get(col):
            if col not in row.index:
                return None
            val = row[col]
            if pd.isna(val):
                return None
            return val

        image_path = safe_get("image_path")
        if image_path is None:
            continue

        lat, lon = safe_get("latitude"), safe_get("longitude")
        geolocation = default_geolocation
        if lat is not None and lon is not None:
            try:
                geolocation = StaticGeolocation(float(lat), float(lon))
            except ValueError as e:
                logger.warning(f"⚠️ Ignoring position for '{image_path}': {e}")

        jobs.append(UploadJob(image_path=str(image_path), geolocation=geolocation))
    return jobs


def jobs_from_args(args: List[str]) -> List[UploadJob]:
    """Image paths given on the command line, or a single CSV manifest."""
    if not args:
        return load_jobs_from_csv(INPUT_CSV)
    if len(args) == 1 and args[0].lower().endswith(".csv"):
        return load_jobs_from_csv(args[0])
    geolocation = geolocation_from_env()
    return [UploadJob(image_path=path, geolocation=geolocation) for path in args]


def show_record(record: ResolvedRecord) -> None:
    """Print a resolved record the way the results page lays it out."""
    recognition = record.recognition
    print(f"\n🏪 {recognition.establishment_name} ({recognition.category})")
    if recognition.style:
        print(f"   Style: {recognition.style}")
    if recognition.tags:
        print(f"   Tags: {', '.join(recognition.tags)}")
    if recognition.description:
        print(f"   {recognition.description}")
    print(f"   📍 {record.resolved_location.label or 'Your location'}")
    print("   Nearby:")
    for place in record.nearby:
        print(f"   - {place.name} | {place.address or place.type_label} | {place.distance_label}")


async def run_job(job: UploadJob, session: SessionHistory) -> Optional[ResolvedRecord]:
    """
    Process one image; a failed run is reported and leaves no record behind.
    """
    try:
        upload = await load_upload(job.image_path)
        record = await process_upload(upload, session, job.geolocation)
    except ShopFinderError as e:
        logger.error(f"❌ {job.image_path}: {e}")
        return None
    show_record(record)
    return record


async def main():
    """
    Process every image in turn and export the session history.

    Runs never overlap: the next image starts only after the previous one
    has produced a record or failed.
    """
    logger.remove()  # Remove default handler
    logger.add(sys.stderr, level=LOG_LEVEL, format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>")

    jobs = jobs_from_args(sys.argv[1:])
    session = SessionHistory()

    try:
        for idx, job in enumerate(jobs):
            print(f"Processing image {idx + 1}/{len(jobs)}: {job.image_path}")
            await run_job(job, session)
    finally:
        # Cleanup: close MapboxClient session to prevent unclosed connector warnings
        await MapboxClient().close()

    if len(session):
        session.export_csv(OUTPUT_CSV)
        print(f"\nSaved {len(session)} result(s) to {OUTPUT_CSV}")


if __name__ == "__main__":
    asyncio.run(main())
