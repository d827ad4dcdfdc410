"""Immutable registry of language profiles.

The registry is built once at startup and handed to every consumer, so
tests can build one from synthetic profiles instead of patching globals.

Example:
    >>> registry = LanguageRegistry.default()
    >>> registry.get("go").file_extensions
    ('go',)

"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType

from basic_code_intel.core.exceptions import LanguageNotFoundError
from basic_code_intel.languages.types import LanguageProfile

logger = logging.getLogger(__name__)

__all__ = ["LanguageRegistry"]


class LanguageRegistry:
    """Lookup table from language identifier to LanguageProfile."""

    __slots__ = ("_by_id", "_by_extension")

    def __init__(self, profiles: Iterable[LanguageProfile]) -> None:
        """Build the registry.

        Args:
            profiles: Profiles to register. Identifiers must be unique.

        Raises:
            ValueError: If two profiles share a language identifier.

        """
        by_id: dict[str, LanguageProfile] = {}
        by_extension: dict[str, list[LanguageProfile]] = {}
        for profile in profiles:
            if profile.language_id in by_id:
                raise ValueError(f"Duplicate language profile: {profile.language_id}")
            by_id[profile.language_id] = profile
            for extension in profile.file_extensions:
                by_extension.setdefault(extension, []).append(profile)

        self._by_id = MappingProxyType(by_id)
        self._by_extension = MappingProxyType(
            {ext: tuple(found) for ext, found in by_extension.items()}
        )
        logger.debug("Language registry built with %d profiles", len(by_id))

    @classmethod
    def default(cls) -> LanguageRegistry:
        """Return a registry holding every built-in profile."""
        from basic_code_intel.languages.profiles import BUILTIN_PROFILES

        return cls(BUILTIN_PROFILES)

    def get(self, language_id: str) -> LanguageProfile:
        """Return the profile for a language identifier.

        Raises:
            LanguageNotFoundError: If no profile is registered under that id.

        """
        try:
            return self._by_id[language_id]
        except KeyError:
            raise LanguageNotFoundError(language_id) from None

    def for_extension(self, extension: str) -> tuple[LanguageProfile, ...]:
        """Return every profile claiming a file extension (without the dot)."""
        return self._by_extension.get(extension.lstrip("."), ())

    def for_path(self, path: str) -> LanguageProfile | None:
        """Return the first profile matching a file path, or None.

        Multi-part extensions (``rs.in``) are preferred over the last suffix.
        """
        name = path.rsplit("/", 1)[-1]
        parts = name.split(".")[1:]
        for i in range(len(parts)):
            found = self.for_extension(".".join(parts[i:]))
            if found:
                return found[0]
        return None

    def __contains__(self, language_id: object) -> bool:
        return language_id in self._by_id

    def __iter__(self) -> Iterator[LanguageProfile]:
        return iter(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)
