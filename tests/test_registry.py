"""
Component registry tests

Tests upsert/lookup semantics and category listing.
"""

import threading

from dcecomp.lib.registry import ComponentRegistry
from dcecomp.models import ComponentDefinition


def definition_make(class_id, name=None, import_path="x"):
    return ComponentDefinition(classId=class_id, componentName=name or class_id, importPath=import_path)


class TestUpsert:
    """Test insert-or-overwrite behavior"""

    def test_insert_and_lookup(self):
        registry = ComponentRegistry()
        entry = registry.upsert("Foo", definition_make("Foo"))

        assert registry.lookup("Foo") is entry
        assert entry.category == "Custom"
        assert entry.visibleInMenu is True
        assert entry.key == "Foo"

    def test_lookup_missing(self):
        assert ComponentRegistry().lookup("Nope") is None

    def test_overwrite(self):
        """A later upsert replaces the earlier entry, no merge"""
        registry = ComponentRegistry()
        registry.upsert("Foo", definition_make("Foo", import_path="old"))
        registry.upsert("Foo", definition_make("Foo", import_path="new"), category="Other")

        entry = registry.lookup("Foo")
        assert len(registry) == 1
        assert entry.definition.importPath == "new"
        assert entry.category == "Other"

    def test_entries_sorted_by_key(self):
        registry = ComponentRegistry()
        for name in ["b", "c", "a"]:
            registry.upsert(name, definition_make(name))

        assert [entry.key for entry in registry.entries_list()] == ["a", "b", "c"]

    def test_entries_by_category(self):
        registry = ComponentRegistry()
        registry.upsert("a", definition_make("a"))
        registry.upsert("b", definition_make("b"), category="Builtin")

        assert [entry.key for entry in registry.entries_listByCategory("Custom")] == ["a"]

    def test_concurrent_upserts(self):
        """Upserts from many threads are all stored"""
        registry = ComponentRegistry()

        def worker(offset):
            for index in range(50):
                registry.upsert(f"c{offset}-{index}", definition_make(f"c{offset}-{index}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(registry) == 400


class TestSerialization:
    """Test the catalog representation of definitions"""

    def test_as_dict(self):
        from dcecomp.models import PropertyDefinition, PropertyType, Vector3

        definition = ComponentDefinition(
            classId="Door",
            componentName="Sliding Door",
            importPath="src/door",
            properties=[PropertyDefinition("offset", PropertyType.VECTOR3, Vector3(1.0, 2.0, 3.0))],
        )

        assert definition.asDict() == {
            "class": "Door",
            "component": "Sliding Door",
            "import-file": "src/door",
            "properties": [{"name": "offset", "type": "vector3", "default": [1.0, 2.0, 3.0]}],
        }
