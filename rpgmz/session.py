"""The project a tool session is working on.

Core storage objects take their project explicitly; only the tool layer
keeps a Session, opened once by load_project / create_project.
"""

import logging
from pathlib import Path

from .scaffold import init_project
from .storage import NoProjectLoadedError, ProjectManager

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, project: ProjectManager | None = None) -> None:
        self.project = project

    def open(self, project_path: Path | str) -> ProjectManager:
        self.project = ProjectManager.load(project_path)
        return self.project

    def create(self, project_path: Path | str, game_title: str) -> ProjectManager:
        init_project(project_path, game_title)
        return self.open(project_path)

    def close(self) -> None:
        self.project = None

    def require(self) -> ProjectManager:
        if self.project is None:
            raise NoProjectLoadedError("No project loaded. Use load_project or create_project first.")
        return self.project
