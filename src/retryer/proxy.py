"""
Interface-satisfying delegating proxies.

new_proxy() builds, once per interface type, a subclass of that interface
whose public methods forward to a target object through Retryer.execute().
The target's exceptions are raised directly by the forwarded call, so the
engine always sees the original exception object.
"""

import functools
import inspect
from typing import TYPE_CHECKING, Any, Callable, Generic, Protocol

from retryer.exceptions import InvalidArgument
from retryer.logging_config import get_logger

if TYPE_CHECKING:
    from retryer.engine import Retryer

logger = get_logger(__name__)

_EXCLUDED_BASES = (object, Protocol, Generic)

# Each cached class keeps its interface alive; bounded so runtime-created
# interfaces can be released
PROXY_CACHE_SIZE = 256


def _is_method(attr: Any) -> bool:
    return not isinstance(attr, type) and (callable(attr) or isinstance(attr, (staticmethod, classmethod)))


def _classify_members(interface_type: type) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Split an interface's public members into (methods, attributes).

    The closest definition in the MRO decides which kind a name is.
    Annotated-only names (Protocol data members) count as attributes.
    Abstract members are included even when private, since an ABC
    cannot be instantiated without them.
    """
    kinds: dict[str, bool] = {}
    for klass in interface_type.__mro__:
        if klass in _EXCLUDED_BASES:
            continue
        for name, attr in vars(klass).items():
            if not name.startswith("_") and not isinstance(attr, type):
                kinds.setdefault(name, _is_method(attr))
        for name in inspect.get_annotations(klass):
            if not name.startswith("_"):
                kinds.setdefault(name, False)
    for name in getattr(interface_type, "__abstractmethods__", ()):
        kinds.setdefault(name, _is_method(inspect.getattr_static(interface_type, name)))

    methods = tuple(sorted(name for name, is_method in kinds.items() if is_method))
    attributes = tuple(sorted(name for name, is_method in kinds.items() if not is_method))
    return methods, attributes


def interface_methods(interface_type: type) -> tuple[str, ...]:
    """Names of the methods making up an interface's capability set."""
    return _classify_members(interface_type)[0]


def interface_attributes(interface_type: type) -> tuple[str, ...]:
    """Names of the properties and data members an interface declares."""
    return _classify_members(interface_type)[1]


def implements(target: Any, interface_type: type) -> bool:
    """True if target is an instance of interface_type or provides all its methods."""
    try:
        if isinstance(target, interface_type):
            return True
    except TypeError:
        # Protocols without @runtime_checkable reject isinstance()
        pass
    return all(callable(getattr(target, name, None)) for name in interface_methods(interface_type))


def _delegating_method(name: str, interface_attr: Any) -> Callable[..., Any]:
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        target_method = getattr(self._target, name)
        return self._retryer.execute(lambda: target_method(*args, **kwargs))

    method.__name__ = name
    if callable(interface_attr):
        functools.update_wrapper(method, interface_attr, assigned=("__name__", "__doc__"), updated=())
    return method


def _delegating_attribute(name: str) -> property:
    return property(
        lambda self: getattr(self._target, name),
        lambda self, value: setattr(self._target, name, value),
        doc=f"Read from the wrapped target without retry: {name}",
    )


def _proxy_init(self: Any, retryer: "Retryer", target: Any) -> None:
    object.__setattr__(self, "_retryer", retryer)
    object.__setattr__(self, "_target", target)


def _proxy_repr(self: Any) -> str:
    return f"<retrying {type(self).__name__} for {self._target!r}>"


@functools.lru_cache(maxsize=PROXY_CACHE_SIZE)
def proxy_class(interface_type: type) -> type:
    """Generate (and cache) the delegating class for interface_type."""
    methods = interface_methods(interface_type)
    namespace: dict[str, Any] = {
        "__module__": __name__,
        "__init__": _proxy_init,
        "__repr__": _proxy_repr,
    }
    for name in methods:
        namespace[name] = _delegating_method(name, getattr(interface_type, name, None))
    for name in interface_attributes(interface_type):
        namespace[name] = _delegating_attribute(name)

    metaclass = type(interface_type)
    cls = metaclass(f"Retrying{interface_type.__name__}", (interface_type,), namespace)

    logger.debug(
        "Generated retry proxy class",
        extra={"interface": interface_type.__qualname__, "methods": list(methods)},
    )
    return cls


def new_proxy(retryer: "Retryer", target: Any, interface_type: type) -> Any:
    """
    Build a proxy of interface_type forwarding every method call to target.

    Raises:
        InvalidArgument: If target or interface_type is missing, if
            interface_type is not a class, or if target does not
            implement it
    """
    if target is None:
        raise InvalidArgument("target must not be None", argument="target")
    if interface_type is None:
        raise InvalidArgument("interface_type must not be None", argument="interface_type")
    if not inspect.isclass(interface_type):
        raise InvalidArgument(
            f"interface_type must be a class, got {type(interface_type).__name__}",
            argument="interface_type",
        )
    if not implements(target, interface_type):
        raise InvalidArgument(
            f"{type(target).__name__} does not implement {interface_type.__name__}",
            argument="target",
        )
    return proxy_class(interface_type)(retryer, target)
