from __future__ import annotations

from tests.conftest import DIAMOND_MANIFEST, EXAMPLE_MANIFEST
from vite_manifest.domain.models import EntryRecord, Manifest
from vite_manifest.domain.services import StyleClosureCollector


def make_manifest(*entries: EntryRecord) -> Manifest:
    return Manifest.production(entries, source_dir="dist", path="dist/manifest.json")


class TestStyleClosureCollector:
    def test_diamond_visits_shared_node_once(self, write_manifest, loader):
        manifest = loader.load(write_manifest(DIAMOND_MANIFEST))

        styles = StyleClosureCollector(manifest).get_css("a.js")

        assert styles == ["c.css", "d.css", "b.css", "a.css"]

    def test_imported_styles_come_first(self, write_manifest, loader):
        manifest = loader.load(write_manifest(EXAMPLE_MANIFEST))

        assert StyleClosureCollector(manifest).get_css("main.js") == [
            "chunk.xyz.css",
            "main.abc.css",
        ]

    def test_cycle_terminates(self):
        manifest = make_manifest(
            EntryRecord("a", css=("a.css",), imports=("b",)),
            EntryRecord("b", css=("b.css",), imports=("a",)),
        )

        assert StyleClosureCollector(manifest).get_css("a") == ["b.css", "a.css"]

    def test_shared_stylesheet_listed_once(self):
        manifest = make_manifest(
            EntryRecord("a", css=("shared.css", "a.css"), imports=("b",)),
            EntryRecord("b", css=("shared.css",)),
        )

        assert StyleClosureCollector(manifest).get_css("a") == ["shared.css", "a.css"]

    def test_unknown_entry(self):
        manifest = make_manifest(EntryRecord("a", css=("a.css",), imports=("ghost",)))
        collector = StyleClosureCollector(manifest)

        assert collector.get_css("missing") == []
        assert collector.get_css("a") == ["a.css"]

    def test_results_are_copies(self):
        collector = StyleClosureCollector(make_manifest(EntryRecord("a", css=("a.css",))))

        collector.get_css("a").append("mutated.css")

        assert collector.get_css("a") == ["a.css"]


class TestCollectStyles:
    def test_urls_with_base(self, write_manifest, registrar, host):
        dist = write_manifest(EXAMPLE_MANIFEST)

        styles = registrar.collect_styles(dist, "main.js", "/dist/")

        assert styles == ["/dist/chunk.xyz.css", "/dist/main.abc.css"]
        assert host.styles.registered == {}

    def test_dev_mode_has_no_styles(self, empty_dir, registrar):
        assert registrar.collect_styles(empty_dir, "src/main.ts") == []

    def test_missing_entry(self, write_manifest, registrar):
        dist = write_manifest(EXAMPLE_MANIFEST)

        assert registrar.collect_styles(dist, "missing.js") == []
