import pytest

from main import jobs_from_args, load_jobs_from_csv
from shopfinder.geolocation import StaticGeolocation
from shopfinder.models import Coordinates


@pytest.mark.asyncio
async def test_manifest_rows_carry_their_own_position(tmp_path):
    manifest = tmp_path / "images.csv"
    manifest.write_text(
        "image_path,latitude,longitude\n"
        "fotos/padaria.jpg,-18.9186,-48.2772\n"
        "fotos/mercado.jpg,,\n"
    )

    jobs = load_jobs_from_csv(str(manifest))

    assert [job.image_path for job in jobs] == ["fotos/padaria.jpg", "fotos/mercado.jpg"]
    assert isinstance(jobs[0].geolocation, StaticGeolocation)
    assert await jobs[0].geolocation() == Coordinates(latitude=-18.9186, longitude=-48.2772)


def test_image_paths_from_command_line():
    jobs = jobs_from_args(["a.jpg", "b.png"])
    assert [job.image_path for job in jobs] == ["a.jpg", "b.png"]
