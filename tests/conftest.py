"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from weigh_in.clients.gateway import WeighInClient
from weigh_in.db import init_db
from weigh_in.web import create_app


def make_id(n: int) -> str:
    """Build a valid 24-hex-char entry id."""
    return f"{n:024x}"


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
async def db_path(temp_db_path):
    """A temporary database with the schema created."""
    await init_db(temp_db_path)
    return temp_db_path


@pytest.fixture
def api_client(temp_db_path):
    """TestClient for an app backed by a temporary database."""
    with TestClient(create_app(temp_db_path)) as client:
        yield client


@pytest.fixture
def gateway(api_client):
    """Gateway client talking to the in-process app."""
    return WeighInClient(api_client)


@pytest.fixture
def sample_records():
    """Table records as served by the API, plus one unsaved placeholder row."""
    return [
        {"id": make_id(1), "Date": "03-01-24", "Weight": 182.4, "BMI": 25.1},
        {"id": make_id(2), "Date": "01-15-24", "Weight": 185.0, "BMI": 25.6},
        {"id": make_id(3), "Date": "02-10-24", "Weight": 183.2, "BMI": 25.3},
        {"id": "placeholder-1", "Date": "03-02-24", "Weight": 0, "BMI": 0},
    ]


RAW_SCALE_CSV = """Time,Weight,BMI,Body Fat,Fat-Free Body Weight,Subcutaneous Fat,Visceral Fat,Body Water,Skeletal Muscle,Bone Mass,Protein,BMR,Metabolic Age,Heart Rate
"03/01/2024, 7:05:40 AM",182.4lb,25.1,21.3%,143.5lb,18.9%,10,55.2%,130.1lb,7.3lb,17.8%,1820kcal,38,62bpm
"03/01/2024, 9:15:00 PM",184.0lb,25.3,21.9%,143.7lb,19.2%,10,54.8%,130.3lb,7.3lb,17.6%,1825kcal,38,70bpm
"03/02/2024, 7:01:12 AM",181.8lb,25.0,--,--,--,--,--,--,--,--,--,--,--
"03/03/2024, 7:00:00 AM",--,--,--,--,--,--,--,--,--,--,--,--,--
"""

PROCESSED_CSV = """Date,Weight,BMI,Body Fat %,V-Fat,S-Fat,Age,HR,Water %,Bone Mass %,Protien %,Fat Free Weight,Bone Mass LB,BMR,Muscle Mass
01-15-24,185.0,25.6,22.0,11,19.5,39,65,54.5,4.0,17.5,144.3,7.4,1830,131.0
01-16-24,184.6,25.5,,,,,,,,,,,,
01-16-24,184.6,25.5,21.8,11,19.4,39,64,54.6,4.0,17.5,144.4,7.4,1829,131.1
,183.0,25.2,21.5,10,19.1,38,63,54.9,4.0,17.6,144.0,7.3,1825,130.8
01-18-24,,25.2,21.5,10,19.1,38,63,54.9,4.0,17.6,144.0,7.3,1825,130.8
"""


@pytest.fixture
def raw_scale_csv():
    return RAW_SCALE_CSV


@pytest.fixture
def processed_csv():
    return PROCESSED_CSV
