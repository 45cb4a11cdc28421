"""
Registry of available components

Holds the ComponentRegistryEntry for every compiled component, keyed by
component name. Upserts are last-write-wins and serialized with a lock so
the registry can be fed from worker threads.
"""

import threading
from typing import Dict, List, Optional

from ..models.components import ComponentDefinition, ComponentRegistryEntry
from .log import LOG


class ComponentRegistry:
    """
    Registry of component entries

    Maps component names to ComponentRegistryEntry objects containing the
    definition and its add-menu metadata.
    """

    def __init__(self) -> None:
        """Initialize an empty registry"""
        self.entries: Dict[str, ComponentRegistryEntry] = {}
        self.lock = threading.Lock()

    def upsert(
        self,
        key: str,
        definition: ComponentDefinition,
        category: str = "Custom",
        visibleInMenu: bool = True,
    ) -> ComponentRegistryEntry:
        """
        Insert or replace the entry stored under `key`

        Args:
            key: Component name (class id when no name was given)
            definition: Validated component definition
            category: Add-component menu category
            visibleInMenu: Whether to offer the component in the add menu

        Returns:
            The stored entry
        """
        entry = ComponentRegistryEntry(
            definition=definition, category=category, visibleInMenu=visibleInMenu
        )
        with self.lock:
            if key in self.entries:
                LOG(f"Replacing component '{key}'", level=2)
            self.entries[key] = entry
        return entry

    def lookup(self, key: str) -> Optional[ComponentRegistryEntry]:
        """Get the entry stored under `key`, or None"""
        with self.lock:
            return self.entries.get(key)

    def entries_list(self) -> List[ComponentRegistryEntry]:
        """All entries in key order"""
        with self.lock:
            return [self.entries[key] for key in sorted(self.entries)]

    def entries_listByCategory(self, category: str) -> List[ComponentRegistryEntry]:
        """All entries of one category in key order"""
        return [entry for entry in self.entries_list() if entry.category == category]

    def __len__(self) -> int:
        with self.lock:
            return len(self.entries)

    def __contains__(self, key: object) -> bool:
        with self.lock:
            return key in self.entries
