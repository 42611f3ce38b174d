"""Interactive terminal front end for the project list."""

from projecthub.utils.api_client import APIError
from projecthub.views.project_card import CARD_WIDTH, ProjectCard
from projecthub.views.project_modal import ProjectModal

PROMPT = '> '

HELP_TEXT = """Commands:
  list                 Reload all projects
  search <text>        Search projects (empty text lists everything)
  add                  Add a project
  edit <id>            Edit a project
  delete <id>          Delete a project
  show <id>            Fetch a single project from the server
  export [csv|xlsx]    Export the displayed projects
  help                 Show this help
  quit                 Exit"""


def render_project_list(container, width=CARD_WIDTH):
    """Render the whole list view as text.

    Args:
        container (ProjectListContainer): State to render
        width (int): Card width

    Returns:
        str: The rendered view
    """
    lines = ['=' * width, 'Project List', '=' * width]

    if container.search_query:
        lines.append(f"Search: {container.search_query}")

    if container.error:
        lines.append(f"!! {container.error}")

    if container.is_loading:
        lines.append('Loading...')
    elif not container.projects:
        lines.append('No projects found.')
    else:
        for project in container.projects:
            card = ProjectCard(project, container.open_modal, container.handle_delete)
            lines.append(card.render(width))

    return '\n'.join(lines)


class ProjectConsole:
    """Read commands, drive the container, print the list after each action."""

    def __init__(self, container, exporter=None, input_func=input, output_func=print,
                 prompt_func=None):
        """Initialize the console.

        Args:
            container (ProjectListContainer): Container holding the project state
            exporter (SnapshotExporter, optional): Used by the export command
            input_func (callable): Reads one line of user input
            output_func (callable): Writes one block of output
            prompt_func (callable, optional): Redraws the prompt after a list
                rendered while the console waits for input
        """
        self.container = container
        self.exporter = exporter
        self.input = input_func
        self.output = output_func
        self.redraw_prompt = prompt_func or (lambda: print(PROMPT, end='', flush=True))
        self._waiting_for_input = False
        self.modal = ProjectModal(on_submit=container.submit, on_close=container.close_modal)
        self._was_loading = container.is_loading
        container.subscribe(self._on_change)

    def run(self):
        """Mount the container and process commands until quit or end of input."""
        self.container.mount()
        self.output(HELP_TEXT)
        try:
            while True:
                self._waiting_for_input = True
                try:
                    line = self.input(PROMPT)
                except EOFError:
                    break
                finally:
                    self._waiting_for_input = False
                if not self.handle_command(line):
                    break
        finally:
            self.container.unmount()

    def handle_command(self, line):
        """Execute one command line.

        Returns:
            bool: False when the console should exit
        """
        command, _, argument = line.strip().partition(' ')
        command = command.lower()
        argument = argument.strip()

        if not command:
            return True
        if command in ('quit', 'exit', 'q'):
            return False
        if command == 'help':
            self.output(HELP_TEXT)
        elif command == 'list':
            self.container.reload()
        elif command == 'search':
            self.container.set_search_query(argument)
        elif command == 'add':
            self.open_form(None)
        elif command == 'edit':
            project_id = self._parse_id(argument)
            if project_id is not None:
                project = self.container.find(project_id)
                if project is None:
                    self.output(f"No project with id {project_id} in the list")
                else:
                    self.open_form(project)
        elif command == 'delete':
            project_id = self._parse_id(argument)
            if project_id is not None:
                self.container.handle_delete(project_id)
        elif command == 'show':
            project_id = self._parse_id(argument)
            if project_id is not None:
                self.show_project(project_id)
        elif command == 'export':
            self.export(argument or 'csv')
        else:
            self.output(f"Unknown command: {command}. Type 'help' for a list of commands.")
        return True

    def open_form(self, project):
        """Run the create/edit form until it is submitted successfully or cancelled."""
        self.container.open_modal(project)
        self.modal.open(self.container.editing_project)

        while self.container.is_modal_open:
            self.output(f"--- {self.modal.title} (empty input keeps the shown value) ---")
            self.modal.name = self._prompt('Name', self.modal.name)
            self.modal.description = self._prompt('Description', self.modal.description)

            if not self.modal.name.strip():
                self.output('Name is required.')
            else:
                self.modal.submit()
                if not self.container.is_modal_open:
                    self.modal.close()
                    return

            if self.input('Try again? [y/N] ').strip().lower() != 'y':
                self.modal.cancel()

    def show_project(self, project_id):
        try:
            project = self.container.api.get_by_id(project_id)
        except APIError as e:
            if self.container.logger:
                self.container.logger.log(f"Error loading project {project_id}: {e}")
            self.output('Failed to load project')
            return
        self.output(ProjectCard(project, self.container.open_modal, self.container.handle_delete).render())

    def export(self, fmt):
        if self.exporter is None:
            self.output('Export is not configured.')
            return
        if fmt not in ('csv', 'xlsx'):
            self.output(f"Unknown export format: {fmt}")
            return
        try:
            if fmt == 'csv':
                path = self.exporter.export_csv(self.container.projects)
            else:
                path = self.exporter.export_xlsx(self.container.projects)
        except OSError as e:
            if self.container.logger:
                self.container.logger.log(f"Error exporting projects: {e}")
            self.output('Failed to export projects')
            return
        self.output(f"Exported {len(self.container.projects)} projects to {path}")

    def _prompt(self, label, current):
        value = self.input(f"{label} [{current}]: ")
        return value if value.strip() else current

    def _parse_id(self, argument):
        try:
            return int(argument)
        except ValueError:
            self.output(f"Expected a numeric project id, got '{argument}'")
            return None

    def _on_change(self, container):
        # Print once per finished request, including debounced searches
        if self._was_loading and not container.is_loading:
            self.output(render_project_list(container))
            # A debounced search finished on the timer thread while the prompt was showing
            if self._waiting_for_input:
                self.redraw_prompt()
        self._was_loading = container.is_loading
