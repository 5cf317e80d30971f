import shutil
from pathlib import Path
from typing import Optional


def resolve_cmd(cmd: str) -> str:
    p = Path(cmd)
    if p.is_file() or ("/" in cmd or "\\" in cmd):
        return str(p.resolve())
    found = shutil.which(cmd)
    if found:
        return found
    raise FileNotFoundError(
        f"Executable '{cmd}' not found. "
        f"Either provide a path (e.g. './server') or ensure it's in PATH."
    )


def resolve_dir(path: Optional[str]) -> Path:
    """
    Resolve a working directory from configuration.

    Args:
        path: Directory as written in the config (absolute, relative to the current directory, or None)

    Returns:
        Absolute path of the directory

    Raises:
        FileNotFoundError: If the directory does not exist
        NotADirectoryError: If the path exists but is not a directory
    """
    base_dir = Path.cwd()
    path_obj = Path(path).expanduser() if path else base_dir
    if not path_obj.is_absolute():
        path_obj = base_dir / path_obj
    path_obj = path_obj.resolve()

    if not path_obj.exists():
        raise FileNotFoundError(f"Path does not exist: {path_obj}")

    if not path_obj.is_dir():
        raise NotADirectoryError(f"Path is not a directory: {path_obj}")

    return path_obj
