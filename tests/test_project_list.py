"""Tests for the project list container."""

import threading
import time
from unittest.mock import MagicMock

import pytest

from projecthub.models.project import Project
from projecthub.operations.project_api import ProjectApi
from projecthub.views.project_list import (
    ProjectListContainer,
    STATUS_ERROR,
    STATUS_IDLE,
    STATUS_LOADING,
)


@pytest.fixture
def container(fake_api, logger):
    container = ProjectListContainer(fake_api, search_delay=0.05, debug_logger=logger)
    yield container
    container.unmount()


def wait_for_idle(container, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if not container.search_pending and not container.is_loading:
            return
        time.sleep(0.01)
    raise AssertionError('container did not settle')


def test_starts_loading_and_mount_loads(container):
    assert container.status == STATUS_LOADING

    container.mount()

    assert container.status == STATUS_IDLE
    assert container.projects == [Project(1, 'A', 'd')]
    assert container.error is None


def test_load_failure_keeps_previous_snapshot(container, fake_api, logger):
    container.mount()
    fake_api.failing.add('get_all')

    container.load_projects()

    assert container.error == 'Failed to load projects'
    assert container.status == STATUS_ERROR
    assert container.projects == [Project(1, 'A', 'd')]
    assert not container.is_loading
    assert any(line.startswith('Error loading projects') for line in logger.lines)


def test_first_load_failure_leaves_empty_list(container, fake_api):
    fake_api.failing.add('get_all')

    container.mount()

    assert container.projects == []
    assert container.error == 'Failed to load projects'


def test_create_appends_server_result(container, fake_api):
    container.mount()
    container.open_modal()

    container.submit({'name': 'B', 'description': 'e'})

    assert container.projects == [Project(1, 'A', 'd'), Project(2, 'B', 'e')]
    assert not container.is_modal_open
    assert container.error is None


def test_create_response_without_id_is_not_accepted(logger):
    api_client = MagicMock()
    api_client.get.return_value = [{'id': 1, 'name': 'A', 'description': 'd'}]
    api_client.post.return_value = {'name': 'B', 'description': 'e'}
    container = ProjectListContainer(ProjectApi(api_client), debug_logger=logger)
    container.mount()
    container.open_modal()

    container.submit({'name': 'B', 'description': 'e'})

    assert container.error == 'Failed to create project'
    assert container.projects == [Project(1, 'A', 'd')]
    assert container.is_modal_open


def test_update_replaces_by_id(container, fake_api):
    fake_api.remote[2] = {'id': 2, 'name': 'B', 'description': 'e'}
    container.mount()
    container.open_modal(container.find(1))

    container.submit({'name': 'A2', 'description': 'd2'})

    assert container.projects == [Project(1, 'A2', 'd2'), Project(2, 'B', 'e')]
    assert fake_api.calls[-1] == ('update', 1, {'name': 'A2', 'description': 'd2'})
    assert container.editing_project is None


def test_update_failure_leaves_modal_open(container, fake_api):
    container.mount()
    container.open_modal(container.find(1))
    fake_api.failing.add('update')

    container.submit({'name': 'X', 'description': 'y'})

    assert container.error == 'Failed to update project'
    assert container.is_modal_open
    assert container.editing_project == Project(1, 'A', 'd')
    assert container.projects == [Project(1, 'A', 'd')]


def test_delete_then_delete_again(container):
    container.mount()

    container.handle_delete(1)
    assert container.projects == []
    assert container.error is None

    container.handle_delete(1)
    assert container.projects == []
    assert container.error == 'Failed to delete project'


def test_next_success_clears_error(container, fake_api):
    container.mount()
    container.handle_delete(42)
    assert container.error == 'Failed to delete project'

    container.load_projects()

    assert container.error is None


def test_reconciles_with_remote_after_mixed_actions(container, fake_api):
    container.mount()

    container.open_modal()
    container.submit({'name': 'B', 'description': 'e'})
    container.open_modal()
    container.submit({'name': 'C', 'description': 'f'})
    container.open_modal(container.find(2))
    container.submit({'name': 'B2', 'description': 'e2'})
    container.handle_delete(1)
    container.open_modal()
    container.submit({'name': 'D', 'description': 'g'})

    assert container.projects == fake_api.remote_projects()
    ids = [p.id for p in container.projects]
    assert len(ids) == len(set(ids))


def test_create_with_reused_id_keeps_ids_unique(container, fake_api, logger):
    container.mount()
    fake_api.next_id = 1

    container.open_modal()
    container.submit({'name': 'Again', 'description': ''})

    assert container.projects == [Project(1, 'Again', '')]
    assert any('reused id 1' in line for line in logger.lines)


def test_blank_search_lists_instead(container, fake_api):
    container.handle_search('   ')

    assert fake_api.calls == [('get_all',)]


def test_search_replaces_snapshot(container, fake_api):
    fake_api.remote[2] = {'id': 2, 'name': 'Beta', 'description': 'e'}
    container.mount()

    container.handle_search('bet')

    assert container.projects == [Project(2, 'Beta', 'e')]


def test_search_failure_sets_error(container, fake_api):
    container.mount()
    fake_api.failing.add('search')

    container.handle_search('x')

    assert container.error == 'Failed to search projects'
    assert container.projects == [Project(1, 'A', 'd')]


def test_rapid_typing_issues_one_request_for_last_value(container, fake_api):
    container.set_search_query('a')
    container.set_search_query('ab')
    container.set_search_query('abc')

    assert fake_api.called.wait(1.0)
    wait_for_idle(container)
    time.sleep(0.1)

    assert fake_api.calls == [('search', 'abc')]
    assert container.search_query == 'abc'


def test_clearing_query_lists_everything(container, fake_api):
    container.set_search_query('a')
    container.set_search_query('')

    assert fake_api.called.wait(1.0)
    wait_for_idle(container)

    assert fake_api.calls == [('get_all',)]


def test_unmount_cancels_pending_search(container, fake_api):
    container.set_search_query('a')
    assert container.search_pending

    container.unmount()
    time.sleep(0.1)

    assert fake_api.calls == []
    assert not container.is_loading
    assert not container.search_pending


def test_listeners_see_loading_transitions(container):
    seen = []
    container.subscribe(lambda c: seen.append(c.is_loading))

    container.load_projects()

    assert seen == [True, False]


def start_blocked_load(container, fake_api):
    """Run load_projects on a worker thread and return once the request is in flight."""
    fake_api.gate = threading.Event()
    worker = threading.Thread(target=container.load_projects)
    worker.start()
    assert fake_api.called.wait(1.0)
    return worker


def wait_until_fired(container, timeout=1.0):
    deadline = time.monotonic() + timeout
    while container.search_pending:
        if time.monotonic() > deadline:
            raise AssertionError('debounced search never fired')
        time.sleep(0.01)


def test_new_query_clears_stale_loading_flag(container):
    assert container.is_loading

    container.set_search_query('a')

    assert not container.is_loading


def test_reload_supersedes_pending_search(container, fake_api):
    fake_api.remote[2] = {'id': 2, 'name': 'Beta', 'description': 'e'}
    container.mount()
    container.set_search_query('bet')

    container.reload()
    time.sleep(0.15)

    assert container.search_query == ''
    assert ('search', 'bet') not in fake_api.calls
    assert container.projects == fake_api.remote_projects()


def test_reload_drops_search_that_fired_during_earlier_action(container, fake_api):
    fake_api.remote[2] = {'id': 2, 'name': 'Beta', 'description': 'e'}
    worker = start_blocked_load(container, fake_api)

    container.set_search_query('bet')
    wait_until_fired(container)
    reloader = threading.Thread(target=container.reload)
    reloader.start()
    time.sleep(0.05)
    fake_api.gate.set()
    worker.join(1.0)
    reloader.join(1.0)
    time.sleep(0.1)

    assert fake_api.calls == [('get_all',), ('get_all',)]
    assert container.projects == fake_api.remote_projects()


def test_unmount_clears_loading_while_request_in_flight(container, fake_api):
    worker = start_blocked_load(container, fake_api)
    assert container.is_loading

    container.unmount()
    assert not container.is_loading

    fake_api.gate.set()
    worker.join(1.0)
    assert not container.is_loading


def test_unmount_drops_search_waiting_for_running_action(container, fake_api):
    worker = start_blocked_load(container, fake_api)

    container.set_search_query('bet')
    wait_until_fired(container)
    container.unmount()
    fake_api.gate.set()
    worker.join(1.0)
    time.sleep(0.1)

    assert fake_api.calls == [('get_all',)]
    assert not container.is_loading
