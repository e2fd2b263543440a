"""
Loading contexts: resolve a dotted marker-type name to a class.

Manifesto:
    Two loading contexts can hold "the same" marker type under the same
    name yet hand back different class objects. The host's own context
    (the normal import system) is authoritative; anything else, such as a
    plugin that executes its vendored copy of the API module, is not.

Architecture:
    ::

        LoadingContext (Protocol)
        ├── ImportLoader   : sys.modules / importlib.import_module (host)
        └── IsolatedLoader : module_from_spec + exec_module, private cache

        API: load(name) → type                (raises MarkerNotFoundError)
             try_load(name) → Ok(type) | Err(exc)

Examples:
    >>> host = ImportLoader()
    >>> foreign = IsolatedLoader("plugin")
    >>> a = host.load("annomap.faces.FacesComponent")
    >>> b = foreign.load("annomap.faces.FacesComponent")
    >>> a is b, a.__qualname__ == b.__qualname__
    (False, True)

Guardrails:
    ❌ DON'T: Treat every exception as "not found"
    ✅ DO: Raise MarkerNotFoundError only for missing modules/attributes;
       anything else propagates so the registry can stop building

Tags:
    loading, importlib, plugin-isolation, annomap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import importlib
import importlib.machinery
import importlib.util
import threading
from collections.abc import Callable, Iterator, Sequence
from types import ModuleType
from typing import Any, Protocol, runtime_checkable

from annomap.errors import MarkerNotFoundError
from annomap.logging import get_logger
from annomap.result import Result, try_result

logger = get_logger(__name__)


@runtime_checkable
class LoadingContext(Protocol):
    """Protocol for marker-type loading contexts."""

    label: str

    def load(self, name: str) -> Any:
        """Resolve ``name`` or raise :class:`MarkerNotFoundError`."""
        ...

    def try_load(self, name: str) -> Result[Any]:
        """Resolve ``name`` and wrap the outcome in a result."""
        ...


def _candidates(name: str) -> Iterator[tuple[str, list[str]]]:
    """Split ``a.b.C.D`` into (module, attribute path), longest module first."""
    parts = name.split(".")
    for i in range(len(parts) - 1, 0, -1):
        yield ".".join(parts[:i]), parts[i:]


def _missing_module(exc: ModuleNotFoundError, module_name: str) -> bool:
    # Only a miss on the module itself (or a parent) counts as "not found";
    # a missing dependency *inside* the module is a real failure.
    missing = exc.name or ""
    return module_name == missing or module_name.startswith(missing + ".")


class BaseLoader:
    """Shared name resolution; subclasses supply ``_import``."""

    label: str = "loader"

    def _import(self, module_name: str) -> ModuleType | None:
        raise NotImplementedError

    def load(self, name: str) -> Any:
        for module_name, attrs in _candidates(name):
            module = self._import(module_name)
            if module is None:
                continue
            obj: Any = module
            for attr in attrs:
                try:
                    obj = getattr(obj, attr)
                except AttributeError as e:
                    raise MarkerNotFoundError(
                        f"{name} not found in loading context {self.label!r}",
                        cause=e,
                    ).with_context(marker=name, loader=self.label) from e
            return obj
        raise MarkerNotFoundError(
            f"no module for {name} in loading context {self.label!r}"
        ).with_context(marker=name, loader=self.label)

    def try_load(self, name: str) -> Result[Any]:
        return try_result(lambda: self.load(name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r})"


class ImportLoader(BaseLoader):
    """The host's loading context: the regular import system."""

    def __init__(
        self,
        label: str = "host",
        *,
        import_module: Callable[[str], ModuleType] = importlib.import_module,
    ):
        self.label = label
        self._import_module = import_module

    def _import(self, module_name: str) -> ModuleType | None:
        try:
            return self._import_module(module_name)
        except ModuleNotFoundError as e:
            if _missing_module(e, module_name):
                return None
            raise


class IsolatedLoader(BaseLoader):
    """
    A private loading context.

    Each requested module is executed afresh from its import spec and kept
    in a per-loader cache, never in ``sys.modules``. Classes it returns have
    the same ``__module__``/``__qualname__`` as the host's but are distinct
    objects.

    Args:
        label: Name used in logs and errors.
        path: Directories to locate modules in (a plugin's vendored tree).
            ``None`` uses the host's search path.
    """

    def __init__(self, label: str = "isolated", *, path: Sequence[str] | None = None):
        self.label = label
        self._path = list(path) if path is not None else None
        self._modules: dict[str, ModuleType] = {}
        self._lock = threading.Lock()

    def _find_spec(self, module_name: str) -> importlib.machinery.ModuleSpec | None:
        if self._path is None:
            try:
                return importlib.util.find_spec(module_name)
            except ModuleNotFoundError:
                return None

        locations = self._path
        spec = None
        parts = module_name.split(".")
        for i in range(len(parts)):
            if not locations:
                return None
            spec = importlib.machinery.PathFinder.find_spec(".".join(parts[: i + 1]), locations)
            if spec is None:
                return None
            locations = list(spec.submodule_search_locations or [])
        return spec

    def _import(self, module_name: str) -> ModuleType | None:
        with self._lock:
            if module_name in self._modules:
                return self._modules[module_name]
            spec = self._find_spec(module_name)
            if spec is None or spec.loader is None:
                return None
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
            self._modules[module_name] = module
            logger.debug("isolated_module_loaded", module=module_name, loader=self.label)
            return module

    def load_module(self, module_name: str) -> ModuleType:
        """The loader's private copy of ``module_name``."""
        module = self._import(module_name)
        if module is None:
            raise MarkerNotFoundError(
                f"no module {module_name} in loading context {self.label!r}"
            ).with_context(loader=self.label, module=module_name)
        return module


__all__ = ["LoadingContext", "BaseLoader", "ImportLoader", "IsolatedLoader"]
