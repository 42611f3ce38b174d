"""Project data model."""

class Project:
    """Represents a project held by the remote collection."""

    def __init__(self, project_id, name, description=''):
        """Initialize a Project.

        Args:
            project_id (int): The project ID, assigned by the server
            name (str): The project name
            description (str): The project description
        """
        self.id = project_id
        self.name = name
        self.description = description

    def to_dict(self):
        """Convert to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description
        }

    def to_payload(self):
        """Convert to a request body without the server-owned id."""
        return {
            'name': self.name,
            'description': self.description
        }

    @classmethod
    def from_dict(cls, data):
        """Create Project from dictionary.

        Raises:
            ValueError: If the payload is not an object or its id is not an integer
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a project object, got {type(data).__name__}")

        project_id = data.get('id')
        # bool is an int subclass
        if isinstance(project_id, bool) or not isinstance(project_id, int):
            raise ValueError(f"Project payload has no integer id: {data!r}")

        for field in ('name', 'description'):
            value = data.get(field)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Project {field} must be text, got {type(value).__name__}")

        return cls(
            project_id=project_id,
            name=data.get('name') or '',
            description=data.get('description') or ''
        )

    def __eq__(self, other):
        if not isinstance(other, Project):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"Project(id={self.id}, name={self.name})"
