from __future__ import annotations

"""
Unit tests for the options domain: comment stripping, field coercion,
loading from disk and serialization.
"""

import os
from pathlib import Path

import pytest

from compendium.domain.config import (
    CompilerOptions,
    TitleSettings,
    load_options,
    options_to_dict,
    parse_options,
    strip_json_comments,
)
from compendium.domain.errors import OptionsError


def test_comments_are_stripped_outside_strings() -> None:
    raw = '{\n  // line\n  "url": "http://example.com", /* block\n spanning */ "x": "/* kept */"\n}'
    stripped = strip_json_comments(raw)

    assert "// line" not in stripped
    assert "block" not in stripped
    assert '"http://example.com"' in stripped
    assert '"/* kept */"' in stripped


def test_defaults_for_empty_object() -> None:
    options = parse_options({})
    assert options == CompilerOptions()
    assert options.warnings == ()
    assert options.source_file_types == ("txt",)
    assert options.template_file is None


def test_fields_are_read_from_camel_case_keys(tmp_path: Path) -> None:
    options = parse_options({
        "outputType": "HTML",
        "sourceFileTypes": [".txt", "md", " "],
        "customAcronyms": ["api", "sdk"],
        "fileContentPlaceholder": "TBD",
        "outputBatchLog": True,
        "htmlSettings": {
            "templateFile": str(tmp_path / "page.html"),
            "hideNavigationNumbering": True,
            "passThroughAssets": True,
        },
    })

    assert options.output_type == "html"
    assert options.source_file_types == ("txt", "md")
    assert options.custom_acronyms == ("api", "sdk")
    assert options.file_content_placeholder == "TBD"
    assert options.output_batch_log is True
    assert options.template_file == str(tmp_path / "page.html")
    assert options.hide_navigation_numbering is True
    assert options.pass_through_assets is True


def test_relative_template_path_is_made_absolute() -> None:
    options = parse_options({"htmlSettings": {"templateFile": "page.html"}})
    assert options.template_file == os.path.abspath("page.html")


def test_invalid_values_fall_back_with_warnings() -> None:
    options = parse_options({
        "outputBatchLog": "yes",
        "customAcronyms": "api",
        "htmlSettings": [],
    })

    assert options.output_batch_log is False
    assert options.custom_acronyms == ()
    assert len(options.warnings) == 2


def test_pdf_output_falls_back_to_html() -> None:
    options = parse_options({"outputType": "pdf"})
    assert options.output_type == "html"
    assert any("not supported" in w for w in options.warnings)


def test_non_object_options_are_rejected() -> None:
    with pytest.raises(OptionsError):
        parse_options(["outputType", "html"])


def test_load_options_from_disk(tmp_path: Path) -> None:
    path = tmp_path / "options.json"
    path.write_text('/* settings */ {"customAcronyms": ["cli"]}', encoding="utf-8")
    assert load_options(str(path)).custom_acronyms == ("cli",)


def test_load_options_rejects_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "options.json"
    path.write_text("  \n", encoding="utf-8")
    with pytest.raises(OptionsError, match="no content"):
        load_options(str(path))


def test_options_round_trip_through_dict() -> None:
    options = parse_options({"customAcronyms": ["api"], "htmlSettings": {"passThroughAssets": True}})
    assert parse_options(options_to_dict(options)) == options


def test_title_settings_projection() -> None:
    options = CompilerOptions(custom_acronyms=("api",), hide_navigation_numbering=True)
    assert options.title_settings() == TitleSettings(hide_numbering_in_titles=True, custom_acronyms=("api",))
