"""Shared fixtures for ksense-risk tests."""

from __future__ import annotations

from unittest import mock

import pytest
import requests

from ksense_risk.client import PatientClient
from ksense_risk.config import Config


@pytest.fixture
def config() -> Config:
    return Config(api_key="test-key", base_url="https://api.test")


@pytest.fixture
def session():
    s = mock.Mock(spec=requests.Session)
    s.headers = {}
    return s


@pytest.fixture
def sleeps():
    """Records every wait the client asks for instead of sleeping."""
    return []


@pytest.fixture
def client(config, session, sleeps) -> PatientClient:
    return PatientClient(config, session=session, sleep=sleeps.append)


@pytest.fixture
def sample_patients() -> list:
    return [
        {"patient_id": "DEMO001", "name": "TestPatient, John", "age": 30, "gender": "M",
         "blood_pressure": "118/76", "temperature": 98.0},
        {"patient_id": "DEMO002", "name": "AlphaTest, Jane", "age": 70, "gender": "F",
         "blood_pressure": "INVALID", "temperature": 102.0},
        {"patient_id": "DEMO003", "name": "Missing, Data"},
    ]
