"""Release workflow services.

- project: project state read from disk (config, version, dependencies)
- runner: step queue, named tasks, reload
- release: readiness check and publish sequencing
- versioning: version mutation steps
- steps: publish and git steps
- registry: wiring of the built-in steps into a runner
"""

from relkit.services.errors import ReleaseError
from relkit.services.project import ProjectState, find_project_root, load_project
from relkit.services.runner import CommandRunner, CommandSpec, RunnerState

__all__ = [
    "CommandRunner",
    "CommandSpec",
    "ProjectState",
    "ReleaseError",
    "RunnerState",
    "find_project_root",
    "load_project",
]
