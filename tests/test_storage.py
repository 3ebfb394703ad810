"""
Tests for cookbook encoding, file persistence and Markdown export.
"""

import os

import frontmatter
import pytest
import yaml

from conftest import make_recipe

from cookstack import storage
from cookstack.collection import RecipeCollection, SortKey
from cookstack.errors import CorruptDataError, NotFoundError


def _document(**overrides):
    document = {
        "format": "cookstack",
        "version": 1,
        "owner": "Lara",
        "recipes": [
            {"name": "Stew", "ingredients": [], "steps": ["Simmer"], "time_minutes": 60},
            {"name": "Toast", "ingredients": [], "steps": ["Toast"], "time_minutes": 5},
        ],
        "order": [1, 0],
    }
    document.update(overrides)
    return yaml.safe_dump(document).encode("utf-8")


class TestRoundTrip:
    """Test cases for serialize/deserialize."""

    def test_round_trip_preserves_everything(self, cookbook, toast):
        """Owner, both orders and every field survive a round trip."""
        cookbook.add(toast, front=True)
        cookbook.sort_by(SortKey.CALORIES, ascending=False)

        restored = RecipeCollection.deserialize(cookbook.serialize())

        assert restored == cookbook
        assert restored.owner_name == "Lara"
        assert restored.names() == cookbook.names()
        assert restored.date_added == cookbook.date_added
        assert restored.find_exact("toast") == toast

    def test_round_trip_empty(self):
        empty = RecipeCollection("Nobody")
        assert RecipeCollection.deserialize(empty.serialize()) == empty

    def test_round_trip_unicode(self):
        collection = RecipeCollection("Zoë")
        collection.add(make_recipe("Crème brûlée"))
        assert RecipeCollection.deserialize(collection.serialize()) == collection

    def test_encoding_is_tagged_and_versioned(self, cookbook):
        raw = yaml.safe_load(cookbook.serialize())
        assert raw["format"] == storage.FORMAT_TAG
        assert raw["version"] == storage.SCHEMA_VERSION
        assert [r["name"] for r in raw["recipes"]] == ["Stew", "Apple Pie", "Omelette"]
        assert raw["order"] == [0, 1, 2]


class TestDecode:
    """Test cases for decoding hand-written and damaged data."""

    def test_order_applied(self):
        collection = storage.decode(_document())
        assert collection.names() == ["Toast", "Stew"]
        assert [r.name for r in collection.date_added] == ["Stew", "Toast"]

    def test_missing_order_means_date_added(self):
        collection = storage.decode(_document(order=None))
        assert collection.names() == ["Stew", "Toast"]

    def test_unknown_keys_ignored(self):
        data = _document(shelf="top")
        assert storage.decode(data).owner_name == "Lara"

    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"\xff\xfe\x00garbage",
            b"recipes: [unclosed",
            b"- just\n- a list\n",
            b"format: something-else\nversion: 1\n",
        ],
    )
    def test_not_a_cookbook(self, data):
        with pytest.raises(CorruptDataError):
            storage.decode(data)

    def test_newer_version_refused(self):
        with pytest.raises(CorruptDataError, match="newer"):
            storage.decode(_document(version=storage.SCHEMA_VERSION + 1))

    @pytest.mark.parametrize("version", [0, "1", None, True])
    def test_invalid_version(self, version):
        with pytest.raises(CorruptDataError):
            storage.decode(_document(version=version))

    def test_type_mismatch(self):
        data = _document(recipes=[{"name": "Stew", "time_minutes": "an hour"}], order=None)
        with pytest.raises(CorruptDataError):
            storage.decode(data)

    def test_duplicate_names(self):
        data = _document(recipes=[{"name": "Stew"}, {"name": "STEW"}], order=None)
        with pytest.raises(CorruptDataError, match="more than once"):
            storage.decode(data)

    @pytest.mark.parametrize("order", [[0], [0, 0], [0, 2], [1, 0, 2]])
    def test_bad_order(self, order):
        with pytest.raises(CorruptDataError):
            storage.decode(_document(order=order))


class TestFiles:
    """Test cases for load, save and create."""

    def test_save_and_load(self, tmp_path, cookbook):
        path = tmp_path / "lara.cookbook"

        storage.save(cookbook, path)

        assert storage.load(path) == cookbook

    def test_save_creates_parent_directories(self, tmp_path, cookbook):
        path = tmp_path / "nested" / "dir" / "lara.cookbook"
        storage.save(cookbook, path)
        assert path.exists()

    def test_save_leaves_no_temp_files(self, tmp_path, cookbook):
        storage.save(cookbook, tmp_path / "lara.cookbook")
        storage.save(cookbook, tmp_path / "lara.cookbook")
        assert sorted(os.listdir(tmp_path)) == ["lara.cookbook"]

    def test_failed_save_keeps_previous_file(self, tmp_path, cookbook, monkeypatch):
        """An error while replacing the file leaves the old contents."""
        path = tmp_path / "lara.cookbook"
        storage.save(RecipeCollection("Lara"), path)
        before = path.read_bytes()

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(storage.os, "replace", broken_replace)
        with pytest.raises(OSError):
            storage.save(cookbook, path)

        assert path.read_bytes() == before
        assert sorted(os.listdir(tmp_path)) == ["lara.cookbook"]

    def test_load_missing(self, tmp_path):
        with pytest.raises(NotFoundError):
            storage.load(tmp_path / "missing.cookbook")

    def test_load_directory(self, tmp_path):
        with pytest.raises(NotFoundError):
            storage.load(tmp_path)

    def test_load_corrupt(self, tmp_path):
        path = tmp_path / "broken.cookbook"
        path.write_bytes(b"\x00\x01 not yaml at all: [")
        with pytest.raises(CorruptDataError):
            storage.load(path)

    def test_create(self, tmp_path):
        path = tmp_path / "lara.cookbook"

        collection = storage.create(path, "  Lara ")

        assert collection.owner_name == "Lara"
        assert len(storage.load(path)) == 0

    def test_create_refuses_to_overwrite(self, tmp_path, cookbook):
        path = tmp_path / "lara.cookbook"
        storage.save(cookbook, path)

        with pytest.raises(FileExistsError):
            storage.create(path, "Lara")
        assert len(storage.load(path)) == 3

        storage.create(path, "Lara", overwrite=True)
        assert len(storage.load(path)) == 0

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("lara.cookbook", "Lara"),
            ("lara.ser", "Lara"),
            ("family", "Family"),
            ("Zoë.cookbook", "Zoë"),
        ],
    )
    def test_title_from_path(self, tmp_path, name, expected):
        assert storage.title_from_path(tmp_path / name) == expected


class TestExport:
    """Test cases for Markdown export."""

    def test_export_recipe(self, tmp_path, toast):
        path = storage.export_recipe(toast, tmp_path / "out")

        assert path.name == "toast.md"
        post = frontmatter.load(path)
        assert post.metadata["title"] == "Toast"
        assert post.metadata["servings"] == 1
        assert post.metadata["category"] == "Breakfast"
        assert "- Bread (2 slices)" in post.content
        assert "1. Toast the bread" in post.content

    def test_export_filename_is_safe(self, tmp_path):
        path = storage.export_recipe(make_recipe("Mac and Cheese / Baked"), tmp_path)
        assert path.name == "mac-and-cheese---baked.md"
