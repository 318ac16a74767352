"""
Fixtures para testes do ClickUp Tools.
"""
import os
import sys

import pytest

# Adiciona src ao path para importar o pacote sem instalação
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from clickup_tools.client import ClickUpClient  # noqa: E402
from clickup_tools.config import Credentials  # noqa: E402

API_BASE = "https://api.clickup.com/api/v2"
API_V3_BASE = "https://api.clickup.com/api/v3"
TEST_TOKEN = "pk_test_token_123456789"
TEST_WORKSPACE = "999"


@pytest.fixture
def credentials():
    """Credenciais com token e workspace padrão."""
    return Credentials(api_token=TEST_TOKEN, workspace_id=TEST_WORKSPACE)


@pytest.fixture
def client(credentials):
    """Cliente configurado."""
    return ClickUpClient(credentials)


@pytest.fixture
def client_without_workspace():
    """Cliente com token mas sem workspace padrão."""
    return ClickUpClient(Credentials(api_token=TEST_TOKEN))


@pytest.fixture
def unconfigured_client():
    """Cliente sem token."""
    return ClickUpClient(Credentials())


@pytest.fixture
def mock_teams_response():
    """Resposta mockada para GET /team."""
    return {
        "teams": [
            {
                "id": "999",
                "name": "Acme",
                "members": [
                    {"user": {"id": 101, "username": "ana", "email": "a@x.com", "initials": "AN", "role": 1}},
                    {"user": {"id": 102, "username": "bob", "email": "b@x.com", "initials": "BO", "role": 3}},
                ]
            },
            {
                "id": "888",
                "name": "Side Project",
                "members": [
                    {"user": {"id": 103, "username": "Carla Dias", "email": "carla@y.com", "initials": "CD"}},
                ]
            }
        ]
    }


@pytest.fixture
def mock_task():
    """Task de exemplo."""
    return {
        "id": "abc123",
        "custom_id": "DEV-42",
        "name": "Ship release",
        "description": "Release notes",
        "status": {"status": "in progress"},
        "priority": {"priority": "high"},
        "assignees": [{"id": 101, "username": "ana"}],
        "tags": [{"name": "backend"}],
        "due_date": "1704240000000",
        "start_date": None,
        "time_estimate": 3600000,
        "url": "https://app.clickup.com/t/abc123",
        "list": {"id": "list1", "name": "Sprint 1"},
        "folder": {"id": "folder1", "name": "Engineering"},
        "space": {"id": "space1"},
    }


@pytest.fixture
def mock_spaces_response():
    """Resposta mockada para GET /team/{id}/space."""
    return {
        "spaces": [
            {"id": "space1", "name": "Engineering"},
            {"id": "space2", "name": "Marketing"},
        ]
    }
