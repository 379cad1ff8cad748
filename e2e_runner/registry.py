"""Registry mapping test names to invokable end-to-end test bodies."""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

log = logging.getLogger(__name__)

type TestBody = Callable[[], Awaitable[object]]

TEST_MARKER = "__e2e_test__"


class DuplicateTestError(ValueError):
    """Raised when two tests are registered under the same name."""


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """A named, zero-argument async test bound to its own class instance."""

    __test__ = False

    name: str
    invoke: TestBody


def e2e_test[F: Callable[..., Any]](func: F) -> F:
    """Mark a method of a test class as an end-to-end test."""
    setattr(func, TEST_MARKER, True)
    return func


def _requires_arguments(params: Iterable[inspect.Parameter]) -> bool:
    return any(
        param.default is inspect.Parameter.empty
        and param.kind
        not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
        for param in params
    )


@dataclass
class TestRegistry:
    """Explicit name to test-body table, populated when suites are imported."""

    __test__ = False

    _factories: dict[str, Callable[[], TestBody]] = field(
        default_factory=dict, repr=False
    )

    def register[F: Callable[[], Awaitable[object]]](
        self, func: F | None = None, *, name: str | None = None
    ) -> F | Callable[[F], F]:
        """Register a zero-argument coroutine function as a test.

        Usable as ``@registry.register`` or ``@registry.register(name="...")``.
        """

        def decorator(body: F) -> F:
            if not inspect.iscoroutinefunction(body):
                raise TypeError(
                    f"Test {body.__qualname__} must be a coroutine function"
                )
            if _requires_arguments(inspect.signature(body).parameters.values()):
                raise TypeError(f"Test {body.__qualname__} must not require arguments")
            self._add(name or body.__name__, lambda: body)
            return body

        if func is None:
            return decorator
        return decorator(func)

    def register_class[C: type](self, cls: C) -> C:
        """Register every ``@e2e_test`` method of a class.

        Methods are registered under their own name. Each discovered test gets
        a fresh instance of the class, so tests only share state the class
        keeps on purpose (class attributes).
        """
        # Definition order, base classes first
        members: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            members.update(vars(klass))

        for attr_name, member in members.items():
            if not inspect.isfunction(member) or not getattr(member, TEST_MARKER, False):
                continue
            if not inspect.iscoroutinefunction(member):
                log.warning(
                    "Skipping %s.%s: not a coroutine function",
                    cls.__name__,
                    attr_name,
                )
                continue

            params = list(inspect.signature(member).parameters.values())
            if not params or _requires_arguments(params[1:]):
                log.warning(
                    "Skipping %s.%s: test methods must not require arguments",
                    cls.__name__,
                    attr_name,
                )
                continue

            self._add(attr_name, _method_factory(cls, attr_name))
        return cls

    def names(self) -> Sequence[str]:
        """Return registered test names in registration order."""
        return list(self._factories)

    def discover(self, names: Iterable[str]) -> Sequence[TestCase]:
        """Build test cases for the given names, skipping unknown ones."""
        test_cases: list[TestCase] = []
        seen: set[str] = set()

        for name in names:
            if name in seen:
                continue
            seen.add(name)

            factory = self._factories.get(name)
            if factory is None:
                log.warning("Test %s is not registered, skipping", name)
                continue

            test_cases.append(TestCase(name=name, invoke=factory()))

        return test_cases

    def _add(self, name: str, factory: Callable[[], TestBody]) -> None:
        if name in self._factories:
            raise DuplicateTestError(f"Test '{name}' is already registered")
        self._factories[name] = factory

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)


def _method_factory(cls: type, attr_name: str) -> Callable[[], TestBody]:
    # One instance per invocation, built inside the test body.
    def factory() -> TestBody:
        async def body() -> object:
            return await getattr(cls(), attr_name)()

        return body

    return factory


default_registry = TestRegistry()
register = default_registry.register
register_class = default_registry.register_class
