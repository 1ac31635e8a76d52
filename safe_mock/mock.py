"""Mock objects that record calls and answer them from stubs."""

from __future__ import annotations

import dataclasses as dc
import inspect
import logging
import typing as t

from .arguments import ArgumentTuple
from .guard import ArgumentsMismatch, NeverStubbed, StubCapture, Unmocked
from .ledger import MethodLedger

T = t.TypeVar("T")

logger = logging.getLogger(__name__)


class MockMethod:
    """Callable standing in for one method of a mocked interface.

    Every call is recorded in :attr:`ledger`, then answered with the first
    matching stub or an :class:`~safe_mock.guard.Unmocked` guard.
    """

    __safe_mock_opaque__ = True

    def __init__(
        self, name: str, signature: inspect.Signature | None = None
    ) -> None:
        self.ledger = MethodLedger(name)
        self._signature = signature

    @property
    def name(self) -> str:
        """Return the mocked member's name."""
        return self.ledger.name

    def arguments_for(self, *args: t.Any, **kwargs: t.Any) -> ArgumentTuple:
        """Capture a call's arguments, normalised through the signature.

        With a known signature, arguments passed by keyword to a positional
        parameter are recorded positionally, so ``f(1)`` and ``f(x=1)`` are
        the same call. Arguments that do not fit are captured as given.
        """
        if self._signature is not None:
            try:
                bound = self._signature.bind(*args, **kwargs)
            except TypeError:
                logger.debug(
                    "Arguments for %s do not fit %s%s",
                    self.name,
                    self.name,
                    self._signature,
                )
            else:
                return ArgumentTuple.capture(*bound.args, **bound.kwargs)
        return ArgumentTuple.capture(*args, **kwargs)

    def __call__(self, *args: t.Any, **kwargs: t.Any) -> t.Any:
        """Record the call and return its stubbed value or a guard."""
        arguments = self.arguments_for(*args, **kwargs)
        ledger = self.ledger
        ledger.record(arguments)
        stub = ledger.find_stub(arguments)
        if stub is not None:
            stub.hits += 1
            return stub.value
        closest = ledger.closest_stub(arguments)
        if closest is None:
            reason: NeverStubbed | ArgumentsMismatch = NeverStubbed(self.name)
        else:
            reason = ArgumentsMismatch(self.name, closest.arguments, arguments)
        return Unmocked(reason, StubCapture(ledger, arguments))

    def __repr__(self) -> str:
        return f"<MockMethod {self.name} calls={len(self.ledger.calls)}>"


def _method_signature(member: t.Any) -> inspect.Signature | None:
    """Return *member*'s call signature without its bound receiver."""
    if isinstance(member, staticmethod):
        func, drop_first = member.__func__, False
    elif isinstance(member, classmethod):
        func, drop_first = member.__func__, True
    elif inspect.isfunction(member):
        func, drop_first = member, True
    else:
        return None
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return None
    params = list(signature.parameters.values())
    if drop_first and params and params[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY,
        inspect.Parameter.POSITIONAL_OR_KEYWORD,
    ):
        params = params[1:]
    return signature.replace(parameters=params)


def _is_method(member: object) -> bool:
    return isinstance(member, (staticmethod, classmethod)) or inspect.isroutine(
        member
    )


def _annotated_names(klass: type) -> t.Iterable[str]:
    try:
        return inspect.get_annotations(klass)
    except NameError:
        # Unresolvable forward references; only the names matter here.
        return vars(klass).get("__annotations__", {})


@dc.dataclass(slots=True)
class InterfaceShape:
    """Public members of an interface, split into methods and data members."""

    name: str
    methods: dict[str, inspect.Signature | None] = dc.field(default_factory=dict)
    fields: set[str] = dc.field(default_factory=set)

    @classmethod
    def of(cls, interface: type) -> InterfaceShape:
        """Collect the public members of *interface* and its bases."""
        shape = cls(interface.__name__)
        for klass in reversed(interface.__mro__):
            if klass is object:
                continue
            for name in _annotated_names(klass):
                shape._add(name, None, is_method=False)
            for name, member in vars(klass).items():
                is_method = _is_method(member)
                signature = _method_signature(member) if is_method else None
                shape._add(name, signature, is_method=is_method)
        return shape

    def _add(
        self, name: str, signature: inspect.Signature | None, *, is_method: bool
    ) -> None:
        if name.startswith("_"):
            return
        if is_method:
            self.fields.discard(name)
            self.methods[name] = signature
        else:
            self.methods.pop(name, None)
            self.fields.add(name)

    def __contains__(self, name: object) -> bool:
        return name in self.methods or name in self.fields


class SafeMock:
    """Mock object whose members are created lazily on first access.

    Without an interface every public attribute is a :class:`MockMethod`.
    With one, only the interface's public members exist: methods become
    :class:`MockMethod` handles and declared data members return an
    :class:`~safe_mock.guard.Unmocked` guard.
    """

    __safe_mock_opaque__ = True

    def __init__(self, interface: type | None = None) -> None:
        self._shape = InterfaceShape.of(interface) if interface else None
        self._methods: dict[str, MockMethod] = {}

    def __getattr__(self, name: str) -> t.Any:
        if name.startswith("_"):
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg)
        method = self._methods.get(name)
        if method is not None:
            return method
        shape = self._shape
        if shape is None:
            method = MockMethod(name)
        elif name in shape.methods:
            method = MockMethod(name, shape.methods[name])
        elif name in shape.fields:
            return Unmocked(NeverStubbed(name))
        else:
            msg = f"{shape.name} has no member {name!r}"
            raise AttributeError(msg)
        self._methods[name] = method
        return method

    def __dir__(self) -> list[str]:
        names = set(super().__dir__())
        if self._shape is not None:
            names.update(self._shape.methods)
            names.update(self._shape.fields)
        names.update(self._methods)
        return sorted(names)

    def __repr__(self) -> str:
        if self._shape is None:
            return "<SafeMock>"
        return f"<SafeMock of {self._shape.name}>"


def methods_of(mock: object) -> dict[str, MockMethod]:
    """Return the method handles *mock* has created so far, keyed by name."""
    if not isinstance(mock, SafeMock):
        msg = f"methods_of() expects a mock, got {type(mock).__name__}"
        raise TypeError(msg)
    return dict(mock._methods)  # noqa: SLF001


def build(interface: type[T] | None = None) -> T:
    """Return a mock for *interface*.

    The result is typed as *interface* so calls on it type-check like the
    real thing. Pass no interface for a free-form mock accepting any public
    method name.
    """
    mock = SafeMock(interface)
    logger.debug("Built %r", mock)
    return t.cast("T", mock)


__all__ = ["InterfaceShape", "MockMethod", "SafeMock", "build", "methods_of"]
