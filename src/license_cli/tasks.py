"""Build tasks for the license pipeline and their dependencies.

The configuration is not resolved when tasks are declared. Each task
receives a provider that is called immediately before the task action runs,
so every run reads license.yml fresh.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from .config import ProjectLicenseConfig
from .exceptions import ConfigurationError
from .template.generator import update_template
from .template.instancer import update_license
from .utils.console import _rich_info, _rich_success

ConfigProvider = Callable[[], ProjectLicenseConfig]

LICENSE_TEMPLATE_UPDATE = "licenseTemplateUpdate"
LICENSE_UPDATE = "licenseUpdate"
ASSEMBLE = "assemble"


@dataclass
class Task:
    """A named unit of work in the task graph."""
    name: str
    description: str
    group: str
    action: Optional[Callable[[], object]] = None  # None for lifecycle tasks
    depends_on: List[str] = field(default_factory=list)

    def execute(self) -> None:
        if self.action is not None:
            self.action()


class TaskGraph:
    """Tasks with dependency edges, executed dependencies-first."""

    def __init__(self):
        self._tasks: Dict[str, Task] = {}

    def add(self, task: Task) -> Task:
        if task.name in self._tasks:
            raise ConfigurationError(f"Task '{task.name}' is already defined")
        self._tasks[task.name] = task
        return task

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            available = ", ".join(sorted(self._tasks))
            raise ConfigurationError(f"Task '{name}' not found. Available tasks: {available}") from None

    def depends(self, name: str, on: str) -> None:
        """Make task ``name`` depend on task ``on``."""
        task = self.get(name)
        self.get(on)
        if on not in task.depends_on:
            task.depends_on.append(on)

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks.values())

    def execution_order(self, targets: Iterable[str]) -> List[Task]:
        """Resolve targets and their dependencies into run order.

        Args:
            targets: Names of the requested tasks.

        Returns:
            List[Task]: Each task once, dependencies before dependents.

        Raises:
            ConfigurationError: On unknown tasks or dependency cycles.
        """
        order: List[Task] = []
        done = set()
        visiting: List[str] = []

        def visit(name: str) -> None:
            if name in done:
                return
            if name in visiting:
                cycle = " -> ".join(visiting[visiting.index(name):] + [name])
                raise ConfigurationError(f"Circular task dependency: {cycle}")
            task = self.get(name)
            visiting.append(name)
            for dependency in task.depends_on:
                visit(dependency)
            visiting.pop()
            done.add(name)
            order.append(task)

        for target in targets:
            visit(target)
        return order

    def run(self, targets: Iterable[str]) -> List[Task]:
        """Execute the targets with their dependencies.

        The first failing task aborts the run; its exception propagates and
        later tasks are not executed.

        Returns:
            List[Task]: The tasks that were executed.
        """
        order = self.execution_order(targets)
        for task in order:
            _rich_info(f"> Task :{task.name}", symbol="running")
            task.execute()
        if order:
            _rich_success(f"Completed {', '.join(t.name for t in order)}", symbol="success")
        return order


def build_task_graph(config_provider: ConfigProvider, current_year: Optional[int] = None) -> TaskGraph:
    """Declare the license tasks and hook them into the default build.

    Args:
        config_provider: Returns the project configuration, called when a task runs.
        current_year (int, optional): Fixed year for both tasks, defaults to today's year.

    Returns:
        TaskGraph: Graph with licenseTemplateUpdate, licenseUpdate and assemble.
    """
    graph = TaskGraph()

    graph.add(Task(
        name=LICENSE_TEMPLATE_UPDATE,
        description="Download configured license into license template file",
        group="license",
        action=lambda: update_template(config_provider(), current_year=current_year),
    ))
    graph.add(Task(
        name=LICENSE_UPDATE,
        description="Update license file from template",
        group="license",
        action=lambda: update_license(config_provider(), current_year=current_year),
    ))
    graph.add(Task(
        name=ASSEMBLE,
        description="Assemble the outputs of this project",
        group="build",
    ))

    # Every assembled artifact ships an up-to-date license file
    graph.depends(ASSEMBLE, on=LICENSE_UPDATE)
    return graph
