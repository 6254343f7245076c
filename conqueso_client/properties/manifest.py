"""Explicit manifest of configuration types and the manifest-scoped scan source.

Configuration types register themselves at import time through a marker
decorator. The scan source imports the requested package roots so that their
decorators run, then introspects every registered type living under them.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from typing import Iterable, TypeVar

from conqueso_client.domain import DEFAULT_COLLECTION_DELIMITER, PropertyDefinition
from conqueso_client.errors import ConfigurationError

from .interfaces import PropertyDefinitionSourcePort
from .introspection import IntrospectionPropertyDefinitionSource

logger = logging.getLogger(__name__)

TargetT = TypeVar("TargetT", bound=type)


class ConfigurationManifest:
    """Ordered registry of configuration types carrying one marker."""

    def __init__(self, name: str = "conqueso_config"):
        self.name = name
        self._registered_types: list[type] = []

    def manifest_register(self, target_type: TargetT) -> TargetT:
        """Register one configuration type; usable as a class decorator.

        Args:
            target_type: Class declaring dynamic properties.

        Returns:
            type: The same class, unchanged.

        Raises:
            TypeError: Raised when target is not a class.
        """

        if not isinstance(target_type, type):
            raise TypeError(f"{self.name} can only mark classes, got {target_type!r}")
        if target_type not in self._registered_types:
            self._registered_types.append(target_type)
        return target_type

    def manifest_types(self, package_roots: Iterable[str], import_packages: bool = True) -> list[type]:
        """Return registered types defined under any of the package roots.

        Args:
            package_roots: Dotted package or module names.
            import_packages: Import roots and their sub-modules before filtering.

        Returns:
            list[type]: Matching types in registration order.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        normalized_roots = tuple(root.strip() for root in package_roots if root and root.strip())
        if import_packages:
            for package_root in normalized_roots:
                _manifest_import_package_tree(package_root)

        return [
            registered_type
            for registered_type in self._registered_types
            if any(_manifest_module_under_root(registered_type.__module__, root) for root in normalized_roots)
        ]


DEFAULT_MANIFEST = ConfigurationManifest()
conqueso_config = DEFAULT_MANIFEST.manifest_register


class ManifestScanPropertyDefinitionSource(PropertyDefinitionSourcePort):
    """Introspect every manifest type found under a set of package roots."""

    def __init__(
        self,
        package_roots: Iterable[str],
        manifest: ConfigurationManifest = DEFAULT_MANIFEST,
        collection_delimiter: str = DEFAULT_COLLECTION_DELIMITER,
        import_packages: bool = True,
    ):
        """Initialize manifest scan source.

        Args:
            package_roots: Dotted package names to scan.
            manifest: Manifest holding marked configuration types.
            collection_delimiter: Delimiter for list, set and map defaults.
            import_packages: Import package trees so marker decorators run.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ConfigurationError: Raised when no package roots are given.
        """

        normalized_roots = tuple(root.strip() for root in package_roots if root and root.strip())
        if not normalized_roots:
            raise ConfigurationError("No scan packages specified")
        if not collection_delimiter:
            raise ConfigurationError("collection_delimiter must not be empty")

        self._package_roots = normalized_roots
        self._manifest = manifest
        self._collection_delimiter = collection_delimiter
        self._import_packages = import_packages

    def source_contribute(self, definitions: dict[str, PropertyDefinition]) -> None:
        """Discover marked types and delegate to the introspection source.

        Args:
            definitions: Mutable mapping from property name to definition.

        Returns:
            None: Mutates the target mapping as side effect.

        Raises:
            ConfigurationError: Raised when no marked types are found or introspection fails.
        """

        discovered_types = self._manifest.manifest_types(self._package_roots, import_packages=self._import_packages)
        if not discovered_types:
            raise ConfigurationError(
                f"No classes marked with {self._manifest.name} found in packages {list(self._package_roots)}"
            )

        logger.info("Discovered %d configuration types to scan for dynamic properties", len(discovered_types))
        IntrospectionPropertyDefinitionSource(
            discovered_types,
            collection_delimiter=self._collection_delimiter,
        ).source_contribute(definitions)


def _manifest_module_under_root(module_name: str, package_root: str) -> bool:
    return module_name == package_root or module_name.startswith(f"{package_root}.")


def _manifest_import_package_tree(package_root: str) -> None:
    try:
        package = importlib.import_module(package_root)
    except ImportError:
        logger.warning("Scan package %s could not be imported", package_root)
        return

    package_path = getattr(package, "__path__", None)
    if package_path is None:
        return

    def _log_walk_error(module_name: str) -> None:
        logger.warning("Scan package %s could not be walked", module_name)

    for module_info in pkgutil.walk_packages(package_path, prefix=f"{package_root}.", onerror=_log_walk_error):
        try:
            importlib.import_module(module_info.name)
        except ImportError:
            logger.warning("Scan module %s could not be imported", module_info.name)
