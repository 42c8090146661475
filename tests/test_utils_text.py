from __future__ import annotations

from ghpo.utils.text import ELLIPSIS, pad_right, rendered_width, truncate


def test_rendered_width_counts_wide_characters_twice():
    assert rendered_width("") == 0
    assert rendered_width("fix/bug") == 7
    assert rendered_width("日本語") == 6
    assert rendered_width("a日b") == 4


def test_truncate_leaves_fitting_text_alone():
    assert truncate("Fix bug", 7) == "Fix bug"
    assert truncate("Fix bug", 100) == "Fix bug"


def test_truncate_adds_ellipsis_within_budget():
    out = truncate("feature/very-long-branch-name-here", 10)
    assert out == "feature/v" + ELLIPSIS
    assert rendered_width(out) == 10


def test_truncate_never_splits_wide_characters():
    # Two-cell characters: "日本" fills 4 cells, the next one would overflow
    assert truncate("日本語テスト", 5) == "日本" + ELLIPSIS
    out = truncate("日本語", 4)
    assert out == "日" + ELLIPSIS
    assert rendered_width(out) <= 4


def test_truncate_long_title_to_ceiling():
    title = "x" * 150
    out = truncate(title, 100)
    assert out == "x" * 99 + ELLIPSIS
    assert rendered_width(out) == 100


def test_truncate_degenerate_widths():
    assert truncate("abc", 0) == ""
    assert truncate("abc", 1) == ELLIPSIS


def test_pad_right_reaches_exact_width():
    assert pad_right("ID", 5) == "ID   "
    assert rendered_width(pad_right("日本", 7)) == 7


def test_pad_right_does_not_truncate():
    assert pad_right("BRANCH", 3) == "BRANCH"
    assert pad_right("BRANCH", 6) == "BRANCH"


def test_pad_right_is_idempotent():
    for text in ("", "a", "日本語", "already wide enough"):
        once = pad_right(text, 12)
        assert pad_right(once, 12) == once
