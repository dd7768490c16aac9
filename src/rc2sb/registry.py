"""Handler registry for subject-based dispatch.

This module maps RC subjects (``dublin_core.subject``) to the handler
that converts them. A registry is an ordinary object: build one with
HandlerRegistry.default() to get every handler in rc2sb.subjects, or
register handlers by hand for tests and custom subjects.
"""

import importlib
import logging
import pkgutil
from collections.abc import Iterator

from .errors import UnsupportedSubjectError
from .handlers.base import Handler

logger = logging.getLogger(__name__)

SUBJECTS_PACKAGE = "rc2sb.subjects"


class HandlerRegistry:
    """Registry of subject handlers.

    Registration happens while setting up, before any conversion;
    afterwards the registry is only read.

    Example:
        >>> registry = HandlerRegistry.default()
        >>> registry.lookup("Translation Words").subject
        'Translation Words'
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    @classmethod
    def default(cls) -> "HandlerRegistry":
        """Create a registry holding every handler in rc2sb.subjects."""
        registry = cls()
        registry.discover_subjects()
        return registry

    def register(self, handler: Handler) -> None:
        """Register a handler under its subject.

        Args:
            handler: Handler instance; its ``subject`` is the key

        Raises:
            ValueError: If the subject is empty or already registered
        """
        if not handler.subject:
            raise ValueError(f"{handler!r} does not declare a subject")
        if handler.subject in self._handlers:
            raise ValueError(f"subject already registered: '{handler.subject}'")
        self._handlers[handler.subject] = handler

    def lookup(self, subject: str) -> Handler:
        """Return the handler for a subject.

        Raises:
            UnsupportedSubjectError: If nothing is registered for the subject.
                The error lists every supported subject.
        """
        try:
            return self._handlers[subject]
        except KeyError:
            raise UnsupportedSubjectError(subject, self.supported_subjects()) from None

    def supported_subjects(self) -> list[str]:
        """List all registered subjects, sorted.

        Example:
            >>> HandlerRegistry.default().supported_subjects()[:2]
            ['Aligned Bible', 'Bible']
        """
        return sorted(self._handlers)

    def discover_subjects(self, package: str = SUBJECTS_PACKAGE) -> None:
        """Import every module of a package and call its ``register()``.

        Args:
            package: Dotted name of the package holding subject modules
        """
        subjects_pkg = importlib.import_module(package)

        for module_info in sorted(pkgutil.iter_modules(subjects_pkg.__path__), key=lambda m: m.name):
            module = importlib.import_module(f"{package}.{module_info.name}")
            register = getattr(module, "register", None)
            if register is None:
                logger.debug("Module %s has no register(); skipped", module.__name__)
                continue
            register(self)

    def __contains__(self, subject: object) -> bool:
        return subject in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[Handler]:
        for subject in self.supported_subjects():
            yield self._handlers[subject]
