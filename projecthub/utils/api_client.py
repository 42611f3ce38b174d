"""JSON-over-HTTP client for the project API."""

import requests


class APIError(Exception):
    """Any failed API call: network error, non-success status or bad payload."""

    def __init__(self, message, status_code=None, url=None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class APIClient:
    """HTTP client translating method calls into JSON requests."""

    def __init__(self, base_url, config, debug=False, debug_logger=None):
        """Initialize the API client.

        Args:
            base_url (str): The base URL for API requests
            config (Config): Configuration instance
            debug (bool): Enable debug output
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.base_url = base_url.rstrip('/')
        self.config = config
        self.debug = debug
        self.logger = debug_logger

    def get_headers(self):
        """Headers sent with every request."""
        return {
            'Content-Type': 'application/json',
            'Accept': 'application/json'
        }

    def get(self, endpoint, params=None):
        """Make a GET request.

        Args:
            endpoint (str): API endpoint path
            params (dict, optional): Query parameters

        Returns:
            dict or list: Response data
        """
        return self._request('GET', endpoint, params=params)

    def post(self, endpoint, json_data=None):
        """Make a POST request with a JSON body."""
        return self._request('POST', endpoint, json_data=json_data)

    def put(self, endpoint, json_data=None):
        """Make a PUT request with a JSON body."""
        return self._request('PUT', endpoint, json_data=json_data)

    def delete(self, endpoint):
        """Make a DELETE request. The response body is ignored."""
        self._request('DELETE', endpoint, expect_body=False)

    def _request(self, method, endpoint, params=None, json_data=None, expect_body=True):
        """Send a request and decode the JSON response.

        No retries: the first failure is raised to the caller.

        Raises:
            APIError: On connection errors, timeouts, non-2xx statuses
                      and undecodable response bodies
        """
        url = f"{self.base_url}{endpoint}"
        self._log(f"{method} {url}")

        try:
            response = requests.request(
                method,
                url,
                headers=self.get_headers(),
                params=params,
                json=json_data,
                timeout=self.config.request_timeout
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self._log(f"  {method} {url} failed with status {status}")
            raise APIError(f"{method} {url} returned {status}", status_code=status, url=url) from e
        except requests.exceptions.RequestException as e:
            self._log(f"  {method} {url} failed: {e}")
            raise APIError(f"{method} {url} failed: {e}", url=url) from e

        self._log(f"  {response.status_code} {method} {url}")

        if not expect_body:
            return None

        try:
            return response.json()
        except ValueError as e:
            self._log(f"  Malformed JSON from {method} {url}: {e}")
            raise APIError(f"{method} {url} returned malformed JSON",
                           status_code=response.status_code, url=url) from e

    def _log(self, message):
        if self.logger:
            self.logger.log(message)
        elif self.debug:
            print(message)
