import os
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Returns the folder holding all user-specific BoxBreathe files. BOXBREATHE_HOME wins if set, which is also how
# the tests keep their files out of the real home directory.
def resolve_data_directory():
    override = os.getenv("BOXBREATHE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".boxbreathe"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path

    logs: Path
    current: Path

    @staticmethod
    def build():
        # Folder for all user-specific stuff, plus the folders within it
        data = ensure_directory(resolve_data_directory())
        logs = ensure_directory(data / "logs")
        current = ensure_directory(data / "current")

        return ProjectPaths(
            data = data,
            logs = logs,
            current = current,
        )
PATHS = ProjectPaths.build()
