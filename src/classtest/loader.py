"""Resolution of ``module:Class`` targets named on the command line."""

import importlib
import importlib.util
import sys
from pathlib import Path

from classtest.exceptions import TargetLoadError


def _import_path(path: Path):
    """Import a source file as a module."""
    if not path.exists():
        raise TargetLoadError(f"File not found: {path}")

    module_name = path.stem
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise TargetLoadError(f"Cannot import {path}")

    # Sibling imports inside the file resolve against its directory
    parent = str(path.parent.resolve())
    if parent not in sys.path:
        sys.path.insert(0, parent)

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def load_class(target: str) -> type:
    """Load a test class from a target string.

    Args:
        target: ``package.module:ClassName`` or ``path/to/file.py:ClassName``

    Returns:
        The class object

    Raises:
        TargetLoadError: If the module or class cannot be found
    """
    module_part, sep, class_part = target.rpartition(":")
    if not sep or not module_part or not class_part:
        raise TargetLoadError(f"Target must look like 'module:ClassName', got '{target}'")

    try:
        if module_part.endswith(".py"):
            module = _import_path(Path(module_part))
        else:
            module = importlib.import_module(module_part)
    except TargetLoadError:
        raise
    except (ImportError, SyntaxError) as e:
        raise TargetLoadError(f"Cannot import '{module_part}': {e}") from e

    obj = module
    for attr in class_part.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            raise TargetLoadError(f"'{class_part}' not found in '{module_part}'") from None

    if not isinstance(obj, type):
        raise TargetLoadError(f"'{class_part}' is not a class")

    return obj
