from __future__ import annotations

"""
Unit tests for the compilation result factories.
"""

from compendium.domain.pipeline_models import (
    DocumentOperation,
    create_error_result,
    create_success_result,
)


def test_success_result_counts_operations() -> None:
    ops = [
        DocumentOperation("/s/a.txt", "/t/a.html", True),
        DocumentOperation("/s/b.txt", "/t/b.html", False),
        DocumentOperation("/s/c.txt", "/t/c.html", True),
    ]
    result = create_success_result("/s", "/t", ops, batch_mode=True, summary="done")

    assert result.ok is True
    assert result.error == ""
    assert (result.total, result.processed, result.skipped) == (3, 2, 1)
    assert result.batch_mode is True
    assert result.copied_assets == []
    assert result.summary == "done"


def test_result_without_converted_documents_is_not_ok() -> None:
    result = create_success_result("/s/a.txt", "/t/a.html", [DocumentOperation("/s/a.txt", "/t/a.html", False)])
    assert result.ok is False
    assert result.error == "No document was converted."
    assert result.skipped == 1


def test_error_result() -> None:
    result = create_error_result("custom HTML template not found: x", "/s", "/t")
    assert result.ok is False
    assert result.error.startswith("custom HTML template")
    assert result.operations == []
    assert result.total == 0
