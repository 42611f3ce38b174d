"""Text rendering of a single project."""

import textwrap

CARD_WIDTH = 80


def render_project_card(project, width=CARD_WIDTH):
    """Render a project as a bordered text card.

    Args:
        project (Project): The project to render
        width (int): Total card width in characters

    Returns:
        str: The card, one line per row
    """
    inner = width - 4
    lines = ['+' + '-' * (width - 2) + '+']

    title = f"#{project.id}  {project.name}"
    lines.append(f"| {title[:inner]:<{inner}} |")

    for row in textwrap.wrap(project.description, inner) or ['']:
        lines.append(f"| {row:<{inner}} |")

    actions = f"[edit {project.id}]  [delete {project.id}]"
    lines.append(f"| {actions:>{inner}} |")
    lines.append('+' + '-' * (width - 2) + '+')
    return '\n'.join(lines)


class ProjectCard:
    """A project bound to its edit and delete actions."""

    def __init__(self, project, on_edit, on_delete):
        self.project = project
        self.on_edit = on_edit
        self.on_delete = on_delete

    def edit(self):
        self.on_edit(self.project)

    def delete(self):
        self.on_delete(self.project.id)

    def render(self, width=CARD_WIDTH):
        return render_project_card(self.project, width)
