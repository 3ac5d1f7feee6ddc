from datetime import datetime

import pandas as pd
import pytest

from main import show_record
from shopfinder.config import check_credentials
from shopfinder.errors import ConfigurationError, RecognitionError, UploadValidationError
from shopfinder.geolocation import DeniedGeolocation, StaticGeolocation, acquire_user_location
from shopfinder.history import SessionHistory
from shopfinder.models import (
    Coordinates,
    FormattedPlace,
    RecognitionResult,
    ResolvedRecord,
    SearchMode,
    SearchParameters,
)
from shopfinder.uploads import load_upload, validate_upload

VALID_OPENAI_KEY = "sk-" + "a" * 40
FALLBACK = Coordinates(latitude=-19.3066, longitude=-48.9234)


def _record(name, created_at=None):
    return ResolvedRecord(
        recognition=RecognitionResult(establishment_name=name, category="Padaria", tags=("pães",)),
        user_location=FALLBACK,
        resolved_location=FALLBACK,
        search_parameters=SearchParameters(SearchMode.BY_TEXT, name, "bakery"),
        nearby=(FormattedPlace(name=name, type_label="bakery", distance_label="111m", address="Rua 1"),),
        image_name=f"{name}.jpg",
        created_at=created_at or datetime(2024, 5, 1, 12, 0, 0),
    )


# --- Upload validation ----------------------------------------------------

def test_validate_upload_limits():
    validate_upload(1024, "image/png")
    with pytest.raises(UploadValidationError):
        validate_upload(11 * 1024 * 1024, "image/png")
    with pytest.raises(UploadValidationError):
        validate_upload(1024, "text/plain")
    with pytest.raises(UploadValidationError):
        validate_upload(1024, None)


@pytest.mark.asyncio
async def test_load_upload_reads_image(tmp_path):
    path = tmp_path / "fachada.png"
    path.write_bytes(b"\x89PNG\r\n")
    upload = await load_upload(path)
    assert upload.name == "fachada.png"
    assert upload.mime_type == "image/png"
    assert upload.data == b"\x89PNG\r\n"


@pytest.mark.asyncio
async def test_load_upload_rejects_bad_files(tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("not an image")
    with pytest.raises(UploadValidationError):
        await load_upload(notes)

    big = tmp_path / "big.jpg"
    big.write_bytes(b"0" * 16)
    with pytest.raises(UploadValidationError):
        await load_upload(big, max_size=8)

    with pytest.raises(UploadValidationError):
        await load_upload(tmp_path / "missing.jpg")


# --- Credentials ----------------------------------------------------------

def test_check_credentials_accepts_real_looking_keys():
    check_credentials(VALID_OPENAI_KEY, "pk.eyJ1Ijoic2hvcGZpbmRlciJ9")


@pytest.mark.parametrize(
    "openai_key, mapbox_token",
    [
        ("", "pk.token"),
        ("sk-short", "pk.token"),
        ("SUA_CHAVE_AQUI_" + "x" * 30, "pk.token"),
        (VALID_OPENAI_KEY, ""),
        (VALID_OPENAI_KEY, "YOUR_MAPBOX_TOKEN"),
    ],
)
def test_check_credentials_rejects_missing_or_placeholder(openai_key, mapbox_token):
    with pytest.raises(ConfigurationError):
        check_credentials(openai_key, mapbox_token)


# --- Geolocation ----------------------------------------------------------

@pytest.mark.asyncio
async def test_geolocation_fallbacks():
    assert await acquire_user_location(None) == FALLBACK
    assert await acquire_user_location(DeniedGeolocation()) == FALLBACK

    async def broken():
        raise PermissionError("blocked")

    assert await acquire_user_location(broken) == FALLBACK


@pytest.mark.asyncio
async def test_geolocation_uses_provider_position():
    position = await acquire_user_location(StaticGeolocation(-18.9186, -48.2772))
    assert position == Coordinates(latitude=-18.9186, longitude=-48.2772)


# --- Models ---------------------------------------------------------------

def test_coordinates_reject_out_of_range_values():
    with pytest.raises(ValueError):
        Coordinates(latitude=91, longitude=0)
    with pytest.raises(ValueError):
        Coordinates(latitude=0, longitude=-181)


def test_recognition_payload_rejects_non_text_name_or_category():
    with pytest.raises(RecognitionError):
        RecognitionResult.from_payload({"estabelecimento": ["Padaria"], "categoria": "Padaria"})
    with pytest.raises(RecognitionError):
        RecognitionResult.from_payload({"estabelecimento": "Padaria Central", "categoria": 7})
    with pytest.raises(RecognitionError):
        RecognitionResult.from_payload(["Padaria Central"])


def test_recognition_payload_optional_fields_default():
    result = RecognitionResult.from_payload({"estabelecimento": "Padaria Central", "categoria": "Padaria"})
    assert result.tags == ()
    assert result.style == ""
    assert result.location_text is None


# --- Session history ------------------------------------------------------

def test_session_history_newest_first_and_reset():
    session = SessionHistory()
    assert session.latest() is None

    first, second = _record("Padaria Central"), _record("Cantina da Maria")
    session.add(first)
    session.add(second)

    assert len(session) == 2
    assert session.latest() is second
    assert list(session) == [second, first]

    session.clear()
    assert len(session) == 0
    assert list(session) == []


def test_session_history_exports_csv(tmp_path):
    session = SessionHistory()
    session.add(_record("Padaria Central"))
    session.add(_record("Cantina da Maria"))

    df = session.to_dataframe()
    assert list(df["establishment"]) == ["Padaria Central", "Cantina da Maria"]
    assert df.loc[0, "nearby"] == "Padaria Central (bakery, 111m)"
    assert df.loc[0, "search_type"] == "text"
    assert df.loc[0, "created_at"] == "2024-05-01T12:00:00"

    out = tmp_path / "results.csv"
    session.export_csv(str(out))
    assert list(pd.read_csv(out)["image"]) == ["Padaria Central.jpg", "Cantina da Maria.jpg"]


def test_recognition_payload_null_or_missing_name_and_category_become_empty():
    result = RecognitionResult.from_payload({"estabelecimento": None, "categoria": None})
    assert result.establishment_name == ""
    assert result.category == ""

    result = RecognitionResult.from_payload({"categoria": "Padaria"})
    assert result.establishment_name == ""
    assert result.category == "Padaria"


def test_show_record_prints_history_entry(capsys):
    session = SessionHistory()
    session.add(_record("Padaria Central"))

    show_record(session.latest())

    out = capsys.readouterr().out
    assert "🏪 Padaria Central (Padaria)" in out
    assert "Tags: pães" in out
    assert "- Padaria Central | Rua 1 | 111m" in out
