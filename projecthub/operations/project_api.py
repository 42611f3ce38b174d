"""Remote project operations."""

from urllib.parse import quote

from projecthub.models.project import Project
from projecthub.utils.api_client import APIError


class ProjectApi:
    """The six project operations exposed by the remote collection."""

    def __init__(self, api_client, debug_logger=None):
        """Initialize the project API.

        Args:
            api_client (APIClient): API client instance
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.api_client = api_client
        self.logger = debug_logger

    def get_all(self):
        """Fetch every project.

        Returns:
            list: List of Project objects
        """
        return self._parse_list(self.api_client.get('/projects'), '/projects')

    def get_by_id(self, project_id):
        """Fetch a single project."""
        endpoint = f'/projects/{project_id}'
        return self._parse_one(self.api_client.get(endpoint), endpoint)

    def create(self, project):
        """Create a project; the server assigns its id.

        Args:
            project (dict or Project): Fields of the new project. Any id is dropped.

        Returns:
            Project: The created project

        Raises:
            APIError: If the request fails or the response has no id
        """
        if isinstance(project, Project):
            payload = project.to_payload()
        else:
            payload = {k: v for k, v in project.items() if k != 'id'}

        return self._parse_one(self.api_client.post('/projects', json_data=payload), '/projects')

    def update(self, project_id, fields):
        """Update some fields of a project.

        Args:
            project_id (int): ID of the project to update
            fields (dict): Fields to change; fields left out stay unchanged

        Returns:
            Project: The full updated project
        """
        endpoint = f'/projects/{project_id}'
        payload = {k: v for k, v in fields.items() if k != 'id'}
        return self._parse_one(self.api_client.put(endpoint, json_data=payload), endpoint)

    def delete(self, project_id):
        """Delete a project. Deleting a missing id fails."""
        self.api_client.delete(f'/projects/{project_id}')

    def search(self, query):
        """Search projects; matching is done by the server.

        Args:
            query (str): Free-text query

        Returns:
            list: List of matching Project objects
        """
        endpoint = f"/projects/search?str={quote(query, safe='')}"
        return self._parse_list(self.api_client.get(endpoint), endpoint)

    def _parse_one(self, data, endpoint):
        try:
            return Project.from_dict(data)
        except ValueError as e:
            if self.logger:
                self.logger.log(f"ERROR: Invalid project from {endpoint}: {e}")
            raise APIError(f"Invalid project in response from {endpoint}: {e}") from e

    def _parse_list(self, data, endpoint):
        if not isinstance(data, list):
            raise APIError(f"Expected a list of projects from {endpoint}, got {type(data).__name__}")

        projects = [self._parse_one(item, endpoint) for item in data]

        if self.logger:
            self.logger.log(f"Retrieved {len(projects)} projects from {endpoint}")

        return projects
