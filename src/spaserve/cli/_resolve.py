"""App resolution for ``spaserve run`` and ``spaserve routes``.

Either imports a ``"module:attribute"`` string or builds the default app
from environment variables.
"""

import importlib
from typing import Any

from spaserve.app import App, create_app
from spaserve.config import ServerConfig


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a spaserve App instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"app"`` (e.g. ``"site"`` resolves to
    ``site.app``).  Factory functions are called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an ``App`` or a factory for one.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a spaserve.App instance"
        raise TypeError(msg)

    return obj


def load_app(import_string: str | None, **overrides: Any) -> App:
    """The app named by *import_string*, or one built from the environment.

    *overrides* only apply to the environment-built app; an imported app
    brings its own config.
    """
    if import_string:
        return resolve_app(import_string)
    return create_app(ServerConfig.from_env(**overrides))
