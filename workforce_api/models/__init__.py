# workforce_api/models/__init__.py
import importlib
import pkgutil
import pathlib

_EXCLUDE_PREFIXES = (
    "workforce_api.models.__pycache__",
)

def load_all():
    """Import every .py in this package so all models register on db.metadata."""
    pkg = __name__
    pkg_path = pathlib.Path(__file__).parent

    for mod in pkgutil.iter_modules([str(pkg_path)]):
        full = f"{pkg}.{mod.name}"
        if full.startswith(_EXCLUDE_PREFIXES):
            continue
        importlib.import_module(full)
