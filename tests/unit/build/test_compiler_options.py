"""Unit tests for CompilerOptions."""

import dataclasses

import pytest

from tscompile.build.compiler_options import CompilerOptions, CompilerOptionsError


class TestCompilerOptions:
    """Test suite for CompilerOptions."""

    def test_defaults(self):
        options = CompilerOptions()

        assert options.target == "ES3"
        assert options.declaration is False
        assert options.source_map is False
        assert options.map_root is None
        assert options.source_root is None
        assert options.remove_comments is False
        assert options.no_implicit_any is False
        assert options.no_resolve is False
        assert options.save_to_disk is False

    def test_immutable(self):
        options = CompilerOptions()

        with pytest.raises(dataclasses.FrozenInstanceError):
            options.target = "ES5"  # type: ignore[misc]

    def test_from_dict(self):
        options = CompilerOptions.from_dict(
            {
                "target": "ES5",
                "declaration": "yes",
                "source_map": "true",
                "remove_comments": "off",
                "no_implicit_any": "1",
                "map_root": "/maps",
                "source_root": "",
            }
        )

        assert options == CompilerOptions(
            target="ES5",
            declaration=True,
            source_map=True,
            remove_comments=False,
            no_implicit_any=True,
            map_root="/maps",
            source_root=None,
        )

    def test_from_dict_accepts_bools(self):
        options = CompilerOptions.from_dict({"save_to_disk": True})

        assert options.save_to_disk is True

    def test_from_dict_unknown_key(self):
        with pytest.raises(CompilerOptionsError, match="Unknown compiler option"):
            CompilerOptions.from_dict({"out_file": "bundle.js"})

    def test_from_dict_invalid_bool(self):
        with pytest.raises(CompilerOptionsError, match="Invalid boolean value for 'source_map'"):
            CompilerOptions.from_dict({"source_map": "maybe"})

    def test_from_dict_empty_target(self):
        with pytest.raises(CompilerOptionsError, match="target"):
            CompilerOptions.from_dict({"target": " "})
