import os
from dotenv import load_dotenv

DEFAULT_API_URL = 'http://localhost:4000/api'

class Config:
    def __init__(self):
        """Initialize configuration with default values."""
        # Remote API
        self.api_url = DEFAULT_API_URL
        self.request_timeout = 30

        # General
        self.debug = False
        self.log_file = None

        # Search box
        self.search_delay = 0.3  # Debounce window in seconds

        # Export
        self.output_directory = "./output"
        self.output_filename_template = "projects_{timestamp}.csv"

    @classmethod
    def from_args(cls, args):
        """Create configuration from command line arguments.

        Args:
            args: Parsed command line arguments
        """
        config = cls()
        config.apply_args(args)
        return config

    @classmethod
    def from_env(cls, env_file='.env'):
        """Create configuration from environment variables.

        Args:
            env_file (str): Path to environment file (default: '.env')
        """
        load_dotenv(env_file)  # Load specified .env file if it exists

        config = cls()
        config.api_url = os.getenv('PROJECTHUB_API_URL') or DEFAULT_API_URL
        config.debug = os.getenv('PROJECTHUB_DEBUG', '').lower() == 'true'

        # Optional environment overrides
        if os.getenv('PROJECTHUB_REQUEST_TIMEOUT'):
            config.request_timeout = float(os.getenv('PROJECTHUB_REQUEST_TIMEOUT'))
        if os.getenv('PROJECTHUB_SEARCH_DELAY'):
            config.search_delay = float(os.getenv('PROJECTHUB_SEARCH_DELAY'))
        if os.getenv('PROJECTHUB_LOG_FILE'):
            config.log_file = os.getenv('PROJECTHUB_LOG_FILE')
        if os.getenv('PROJECTHUB_OUTPUT_DIR'):
            config.output_directory = os.getenv('PROJECTHUB_OUTPUT_DIR')

        return config

    def apply_args(self, args):
        """Override settings with command line arguments that were given.

        Args:
            args: Parsed command line arguments
        """
        if getattr(args, 'api_url', None):
            self.api_url = args.api_url
        if getattr(args, 'debug', False):
            self.debug = True
        if getattr(args, 'log_file', None):
            self.log_file = args.log_file
        if getattr(args, 'output_dir', None):
            self.output_directory = args.output_dir

    def validate(self):
        """Validate the configuration.

        Returns:
            tuple: (bool, str) - (is_valid, error_message)
        """
        if not self.api_url:
            return False, "API URL is required"
        if not self.api_url.startswith(('http://', 'https://')):
            return False, f"API URL must start with http:// or https:// (got {self.api_url})"
        if self.request_timeout <= 0:
            return False, "Request timeout must be positive"
        if self.search_delay < 0:
            return False, "Search delay cannot be negative"
        return True, None
