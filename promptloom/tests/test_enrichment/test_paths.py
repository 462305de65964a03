"""Tests for enrichment path helpers."""

import pytest

from promptloom.core.enrichment.paths import relative_to_file, strip_extension


class TestStripExtension:

    @pytest.mark.parametrize(
        "path, expected",
        [
            ("Button.tsx", "Button"),
            ("src/components/Button.tsx", "Button"),
            ("/abs/path/UserCard.jsx", "UserCard"),
            ("Button.test.tsx", "Button.test"),
            ("Makefile", "Makefile"),
            (".eslintrc", ".eslintrc"),
        ],
    )
    def test_strip(self, path, expected):
        assert strip_extension(path) == expected


class TestRelativeToFile:

    def test_sibling_directory(self):
        assert relative_to_file(
            "/repo/src/components/Button.tsx", "/repo/src/pages/Home.tsx"
        ) == "../components/Button.tsx"

    def test_same_directory(self):
        assert relative_to_file("/repo/src/Button.tsx", "/repo/src/Card.tsx") == "Button.tsx"

    def test_nested_below_current_directory(self):
        assert relative_to_file(
            "/repo/src/ui/Button.tsx", "/repo/src/App.tsx"
        ) == "ui/Button.tsx"

    def test_project_relative_paths(self):
        assert relative_to_file(
            "src/components/Button.tsx", "src/legacy/views/Home.js"
        ) == "../../components/Button.tsx"

    def test_file_without_directory(self):
        assert relative_to_file("src/Button.tsx", "Home.tsx") == "src/Button.tsx"

    def test_empty_target_returned_unchanged(self):
        assert relative_to_file("", "/repo/src/pages/Home.tsx") == ""
