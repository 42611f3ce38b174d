"""Shared pytest fixtures for all tests."""

import threading

import pytest

from projecthub.models.project import Project
from projecthub.utils.api_client import APIError
from projecthub.utils.config import Config

CONFIG_ENV_VARS = [
    'PROJECTHUB_API_URL',
    'PROJECTHUB_DEBUG',
    'PROJECTHUB_REQUEST_TIMEOUT',
    'PROJECTHUB_SEARCH_DELAY',
    'PROJECTHUB_LOG_FILE',
    'PROJECTHUB_OUTPUT_DIR',
]


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep config variables, including ones load_dotenv sets, from leaking between tests."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)


class FakeProjectApi:
    """In-memory stand-in for the remote project collection."""

    def __init__(self, projects=None):
        self.remote = {p['id']: dict(p) for p in (projects or [])}
        self.next_id = max(self.remote, default=0) + 1
        self.calls = []
        self.failing = set()
        self.called = threading.Event()
        # When set to an Event, every call waits on it to simulate a slow request
        self.gate = None

    def _record(self, *call):
        self.calls.append(call)
        self.called.set()
        if self.gate is not None:
            self.gate.wait(2.0)
        if call[0] in self.failing:
            raise APIError(f"{call[0]} failed")

    def get_all(self):
        self._record('get_all')
        return [Project.from_dict(self.remote[k]) for k in sorted(self.remote)]

    def get_by_id(self, project_id):
        self._record('get_by_id', project_id)
        if project_id not in self.remote:
            raise APIError(f"GET /projects/{project_id} returned 404", status_code=404)
        return Project.from_dict(self.remote[project_id])

    def create(self, fields):
        self._record('create', dict(fields))
        record = {'id': self.next_id, 'name': fields.get('name', ''),
                  'description': fields.get('description', '')}
        self.remote[self.next_id] = record
        self.next_id += 1
        return Project.from_dict(record)

    def update(self, project_id, fields):
        self._record('update', project_id, dict(fields))
        if project_id not in self.remote:
            raise APIError(f"PUT /projects/{project_id} returned 404", status_code=404)
        self.remote[project_id].update(fields)
        return Project.from_dict(self.remote[project_id])

    def delete(self, project_id):
        self._record('delete', project_id)
        if project_id not in self.remote:
            raise APIError(f"DELETE /projects/{project_id} returned 404", status_code=404)
        del self.remote[project_id]

    def search(self, query):
        self._record('search', query)
        q = query.lower()
        return [Project.from_dict(self.remote[k]) for k in sorted(self.remote)
                if q in self.remote[k]['name'].lower() or q in self.remote[k]['description'].lower()]

    def remote_projects(self):
        return [Project.from_dict(self.remote[k]) for k in sorted(self.remote)]


class RecordingLogger:
    """Collects log lines instead of writing them."""

    def __init__(self):
        self.lines = []

    def log(self, message):
        self.lines.append(message)


@pytest.fixture
def fake_api():
    return FakeProjectApi([{'id': 1, 'name': 'A', 'description': 'd'}])


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def config(tmp_path):
    config = Config()
    config.output_directory = str(tmp_path / 'output')
    config.search_delay = 0.05
    return config
