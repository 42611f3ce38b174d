"""Project list container: owns the project snapshot and reconciles it with the API."""

import threading

from projecthub.utils.api_client import APIError
from projecthub.utils.scheduler import DebounceTimer

STATUS_IDLE = 'idle'
STATUS_LOADING = 'loading'
STATUS_ERROR = 'error'


class ProjectListContainer:
    """State holder behind the project list view.

    The snapshot is only changed by this object's own success handlers.
    Actions are serialised, so a debounced search firing on the timer thread
    never interleaves with an action issued from the console.
    """

    def __init__(self, project_api, search_delay=0.3, debug_logger=None):
        """Initialize the container.

        Args:
            project_api (ProjectApi): Remote project operations
            search_delay (float): Debounce window for the search box, in seconds
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.api = project_api
        self.logger = debug_logger

        self.projects = []
        self.search_query = ''
        self.is_loading = True
        self.error = None
        self.is_modal_open = False
        self.editing_project = None

        self._search_timer = DebounceTimer(search_delay)
        self._action_lock = threading.RLock()
        self._listeners = []
        self._active = True
        # Bumped whenever a scheduled search is superseded
        self._search_generation = 0

    @property
    def status(self):
        """Display state. Errors overlay the last good snapshot."""
        if self.is_loading:
            return STATUS_LOADING
        if self.error:
            return STATUS_ERROR
        return STATUS_IDLE

    def subscribe(self, callback):
        """Register a callback invoked with the container after each state change."""
        self._listeners.append(callback)

    def mount(self):
        """Initial load."""
        self._active = True
        self.load_projects()

    def unmount(self):
        """Cancel any pending search and clear a loading flag left behind.

        A debounced search that already fired but is still waiting for an
        earlier action to finish is dropped as well.
        """
        self._active = False
        self._search_generation += 1
        self._search_timer.cancel()
        self.is_loading = False
        self._notify()

    def reload(self):
        """Clear the search and list everything, superseding any pending search."""
        self.search_query = ''
        self._search_generation += 1
        self._search_timer.cancel()
        self.load_projects()

    def load_projects(self):
        with self._action_lock:
            self._start_loading()
            try:
                self.projects = self.api.get_all()
                self.error = None
            except APIError as e:
                self._fail('Failed to load projects', 'Error loading projects', e)
            finally:
                self._stop_loading()

    def handle_search(self, query):
        """Search, or reload everything for a blank query."""
        if not query.strip():
            self.load_projects()
            return

        with self._action_lock:
            self._start_loading()
            try:
                self.projects = self.api.search(query)
                self.error = None
            except APIError as e:
                self._fail('Failed to search projects', 'Error searching projects', e)
            finally:
                self._stop_loading()

    def set_search_query(self, query):
        """Record the search box text and schedule a debounced fetch.

        A new query also clears a loading flag left by the previous one.
        """
        self.search_query = query
        self._search_generation += 1
        self.is_loading = False
        self._search_timer.schedule(self._run_scheduled_search, query, self._search_generation)
        self._notify()

    @property
    def search_pending(self):
        return self._search_timer.pending

    def _run_scheduled_search(self, query, generation):
        with self._action_lock:
            if not self._active or generation != self._search_generation:
                return
            if query:
                self.handle_search(query)
            else:
                self.load_projects()

    def handle_delete(self, project_id):
        """Delete a project. There is no confirmation step."""
        with self._action_lock:
            self._start_loading()
            try:
                self.api.delete(project_id)
                self.projects = [p for p in self.projects if p.id != project_id]
                self.error = None
            except APIError as e:
                self._fail('Failed to delete project', 'Error deleting project', e)
            finally:
                self._stop_loading()

    def open_modal(self, project=None):
        """Open the form blank for create, or pre-filled for edit."""
        self.editing_project = project
        self.is_modal_open = True
        self._notify()

    def close_modal(self):
        self.is_modal_open = False
        self.editing_project = None
        self._notify()

    def submit(self, form_data):
        """Create or update from the form fields.

        On failure the modal stays open so the user can retry.

        Args:
            form_data (dict): ``name`` and ``description`` from the form
        """
        with self._action_lock:
            editing = self.editing_project
            self._start_loading()
            try:
                if editing:
                    updated = self.api.update(editing.id, form_data)
                    self.projects = [updated if p.id == editing.id else p for p in self.projects]
                else:
                    created = self.api.create(form_data)
                    self._append(created)
                self.is_modal_open = False
                self.editing_project = None
                self.error = None
            except APIError as e:
                action = 'update' if editing else 'create'
                verb = 'updating' if editing else 'creating'
                self._fail(f'Failed to {action} project', f'Error {verb} project', e)
            finally:
                self._stop_loading()

    def find(self, project_id):
        """Return the project with the given id from the snapshot, or None."""
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def _append(self, project):
        if self.find(project.id) is None:
            self.projects = self.projects + [project]
            return
        # The server handed back an id we already hold; keep ids unique
        if self.logger:
            self.logger.log(f"WARNING: Created project reused id {project.id}; replacing local entry")
        self.projects = [project if p.id == project.id else p for p in self.projects]

    def _start_loading(self):
        self.is_loading = True
        self._notify()

    def _stop_loading(self):
        self.is_loading = False
        self._notify()

    def _fail(self, message, log_prefix, exc):
        self.error = message
        if self.logger:
            self.logger.log(f"{log_prefix}: {exc}")

    def _notify(self):
        for callback in list(self._listeners):
            callback(self)
