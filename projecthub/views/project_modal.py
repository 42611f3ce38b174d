"""Create/edit form for a project."""


class ProjectModal:
    """Form with name and description buffers plus submit and cancel callbacks."""

    def __init__(self, on_submit, on_close):
        """Initialize the modal.

        Args:
            on_submit (callable): Called with ``{'name': ..., 'description': ...}``
            on_close (callable): Called when the form is cancelled
        """
        self.on_submit = on_submit
        self.on_close = on_close
        self.is_open = False
        self.editing_project = None
        self.name = ''
        self.description = ''

    @property
    def title(self):
        return 'Edit Project' if self.editing_project else 'Add Project'

    def open(self, editing_project=None):
        """Show the form, pre-filled when editing."""
        self.editing_project = editing_project
        self.name = editing_project.name if editing_project else ''
        self.description = editing_project.description if editing_project else ''
        self.is_open = True

    def close(self):
        self.is_open = False
        self.editing_project = None
        self.name = ''
        self.description = ''

    def form_data(self):
        return {'name': self.name, 'description': self.description}

    def submit(self):
        self.on_submit(self.form_data())

    def cancel(self):
        self.close()
        self.on_close()
