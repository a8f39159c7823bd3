"""Tests for typings_store.manifest."""

import json

import pytest

from typings_store.errors import ParseError, StoreError
from typings_store.manifest import (
    init_manifest,
    read_manifest,
    sort_dependencies,
    transform_json,
    transform_manifest,
)


# -- transform_json --------------------------------------------------------

class TestTransformJson:
    def test_missing_file_created_with_two_spaces(self, tmp_path):
        path = tmp_path / "new.json"
        received = []

        def transform(value):
            received.append(value)
            return {"a": 1}

        transform_json(path, transform)
        assert received == [None]
        assert path.read_text("utf-8") == '{\n  "a": 1\n}\n'

    def test_empty_file_passes_none(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("", "utf-8")
        received = []

        def transform(value):
            received.append(value)
            return {"a": 1}

        transform_json(path, transform)
        assert received == [None]
        assert path.read_text("utf-8") == '{\n  "a": 1\n}\n'

    def test_keeps_four_space_indent(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{\n    "a": 1\n}\n', "utf-8")
        transform_json(path, lambda value: {**value, "b": 2})
        assert path.read_text("utf-8") == '{\n    "a": 1,\n    "b": 2\n}\n'

    def test_keeps_tab_indent(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{\n\t"a": 1\n}', "utf-8")
        transform_json(path, lambda value: value)
        assert path.read_text("utf-8") == '{\n\t"a": 1\n}'

    def test_single_line_falls_back_to_two_spaces(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"a": 1}', "utf-8")
        transform_json(path, lambda value: value)
        assert path.read_text("utf-8") == '{\n  "a": 1\n}'

    def test_invalid_json_leaves_file_and_releases_lock(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{oops", "utf-8")

        with pytest.raises(ParseError):
            transform_json(path, lambda value: value)
        assert path.read_text("utf-8") == "{oops"

        path.write_text("{}", "utf-8")
        transform_json(path, lambda value: {"fixed": True})
        assert json.loads(path.read_text("utf-8")) == {"fixed": True}


# -- transform_manifest ----------------------------------------------------

class TestTransformManifest:
    def test_missing_manifest_starts_empty(self, project_dir):
        received = []

        def transform(manifest):
            received.append(dict(manifest))
            manifest["dependencies"] = {"b": "b.d.ts", "a": "a.d.ts"}
            return manifest

        transform_manifest(project_dir, transform)
        assert received == [{}]
        text = (project_dir / "typings.json").read_text("utf-8")
        assert text == (
            '{\n  "dependencies": {\n    "a": "a.d.ts",\n    "b": "b.d.ts"\n  }\n}\n'
        )

    def test_empty_manifest_treated_as_new(self, project_dir):
        path = project_dir / "typings.json"
        path.write_text("", "utf-8")
        received = []

        def transform(manifest):
            received.append(dict(manifest))
            return {**manifest, "dependencies": {"a": "x"}}

        transform_manifest(project_dir, transform)
        assert received == [{}]
        assert path.read_text("utf-8") == '{\n  "dependencies": {\n    "a": "x"\n  }\n}\n'

    def test_sorts_all_dependency_maps(self, project_dir):
        def transform(manifest):
            manifest["dependencies"] = {"z": "1", "m": "2"}
            manifest["devDependencies"] = {"y": "1", "b": "2"}
            manifest["ambientDependencies"] = {"node": "1", "jquery": "2"}
            return manifest

        transform_manifest(project_dir, transform)
        manifest = read_manifest(project_dir / "typings.json")
        assert list(manifest["dependencies"]) == ["m", "z"]
        assert list(manifest["devDependencies"]) == ["b", "y"]
        assert list(manifest["ambientDependencies"]) == ["jquery", "node"]

    def test_preserves_unknown_keys(self, project_dir):
        path = project_dir / "typings.json"
        path.write_text(
            json.dumps({"name": "app", "extra": {"k": [1, 2]}}, indent=2), "utf-8"
        )

        def transform(manifest):
            manifest.setdefault("dependencies", {})["x"] = "x.d.ts"
            return manifest

        transform_manifest(project_dir, transform)
        manifest = read_manifest(path)
        assert manifest["name"] == "app"
        assert manifest["extra"] == {"k": [1, 2]}
        assert manifest["dependencies"] == {"x": "x.d.ts"}

    def test_identity_reproduces_original_bytes(self, project_dir):
        path = project_dir / "typings.json"
        original = (
            "{\n"
            '    "name": "app",\n'
            '    "dependencies": {\n'
            '        "a": "file:typings/a.d.ts",\n'
            '        "b": "https://example.com/b.d.ts"\n'
            "    },\n"
            '    "ambientDependencies": {}\n'
            "}\n"
        )
        path.write_text(original, "utf-8")
        transform_manifest(project_dir, lambda manifest: manifest)
        assert path.read_text("utf-8") == original

    def test_identity_sorts_unsorted_maps(self, project_dir):
        path = project_dir / "typings.json"
        path.write_text('{\n  "dependencies": {\n    "b": "1",\n    "a": "2"\n  }\n}\n', "utf-8")
        transform_manifest(project_dir, lambda manifest: manifest)
        assert path.read_text("utf-8") == (
            '{\n  "dependencies": {\n    "a": "2",\n    "b": "1"\n  }\n}\n'
        )

    def test_non_object_manifest_rejected(self, project_dir):
        (project_dir / "typings.json").write_text("[]", "utf-8")
        with pytest.raises(StoreError):
            transform_manifest(project_dir, lambda manifest: manifest)


class TestSortDependencies:
    def test_ignores_absent_maps(self):
        assert sort_dependencies({"name": "x"}) == {"name": "x"}


# -- init_manifest ---------------------------------------------------------

class TestInitManifest:
    def test_creates_default_manifest(self, project_dir):
        path = init_manifest(project_dir)
        assert read_manifest(path) == {"dependencies": {}}

    def test_refuses_to_overwrite(self, project_dir):
        init_manifest(project_dir)
        with pytest.raises(StoreError) as excinfo:
            init_manifest(project_dir)
        assert "already exists" in str(excinfo.value)
