# test_pager.py

import pytest
from unittest.mock import Mock, patch

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from prompt_toolkit.input import DummyInput
from prompt_toolkit.output import DummyOutput

from viewtween.config import ScrollConfig
from viewtween.pager import Document, Pager, PagerHost, parse_marker_folds

SAMPLE = "\n".join([
    "intro",
    "section {{{",
    "a",
    "b",
    "}}}",
    "outro",
])


class TestParseMarkerFolds:

    def test_single_region(self):
        assert parse_marker_folds(SAMPLE.splitlines()) == [(2, 5)]

    def test_nested_regions(self):
        lines = ["{{{", "{{{", "x", "}}}", "}}}"]
        assert parse_marker_folds(lines) == [(1, 5), (2, 4)]

    def test_unclosed_region_extends_to_end(self):
        assert parse_marker_folds(["a {{{", "b", "c"]) == [(1, 3)]

    def test_stray_end_marker_is_ignored(self):
        assert parse_marker_folds(["}}}", "x"]) == []

    def test_markers_on_one_line(self):
        assert parse_marker_folds(["x {{{ y }}}", "z"]) == [(1, 1)]


class TestDocument:

    def test_from_text(self):
        document = Document.from_text(SAMPLE, name="sample")

        assert len(document.lines) == 6
        assert document.folds == [(2, 5)]
        assert document.fold_label(2, 5) == "+--   4 lines: section"

    def test_empty_text(self):
        assert Document.from_text("").lines == [""]

    def test_from_file(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text(SAMPLE, encoding='utf-8')

        document = Document.from_file(str(path))

        assert document.name == str(path)
        assert document.folds == [(2, 5)]


class TestPagerHost:

    def setup_method(self):
        self.on_change = Mock()
        self.host = PagerHost(Document.from_text(SAMPLE), height=10, on_change=self.on_change)
        self.vid = self.host.viewport_id

    def test_closed_region_is_one_row(self):
        assert self.host.visible_rows() == [(1, None), (2, (2, 5)), (6, None)]

    def test_open_folds(self):
        host = PagerHost(Document.from_text(SAMPLE), open_folds=True)
        assert [line for line, _ in host.visible_rows()] == [1, 2, 3, 4, 5, 6]

    def test_toggle_fold(self):
        assert self.host.toggle_fold(3)
        assert len(self.host.visible_rows()) == 6

        assert self.host.toggle_fold(3)
        assert self.host.visible_rows()[1] == (2, (2, 5))
        assert self.host.get_cursor(self.vid)[0] == 2

    def test_open_and_close_without_region(self):
        assert not self.host.open_fold(1)
        assert not self.host.close_fold(1)

    def test_move_cursor_steps_over_closed_region(self):
        self.host.move_cursor(2)
        assert self.host.get_cursor(self.vid)[0] == 6

        self.host.move_cursor(-1)
        assert self.host.get_cursor(self.vid)[0] == 2

        self.host.move_cursor(-5)
        assert self.host.get_cursor(self.vid)[0] == 1

    def test_cursor_motion_scrolls_view(self):
        host = PagerHost(Document.from_text("\n".join(str(n) for n in range(1, 51))), height=10, scrolloff=2)
        vid = host.viewport_id

        host.move_cursor(20)

        view = host.get_view(vid)
        assert view.cursor_line == 21
        assert view.top_line == 14
        assert host.window_line(vid) == 8

        host.move_cursor(-20)
        assert host.get_view(vid).top_line == 1

    def test_writes_notify(self):
        self.host.set_view(self.vid, top_line=2)
        self.on_change.assert_called()

    def test_set_height(self):
        self.on_change.reset_mock()
        self.host.set_height(10)
        self.on_change.assert_not_called()

        self.host.set_height(0)
        assert self.host.height(self.vid) == 1
        self.on_change.assert_called_once()


class TestPager:

    def setup_method(self):
        lines = [f"line {n}" for n in range(1, 201)]
        self.document = Document(lines=lines, name="numbers")
        self.pager = Pager(
            self.document,
            config=ScrollConfig(duration=100),
            scrolloff=2,
            input=DummyInput(),
            output=DummyOutput()
        )
        self.host = self.pager.host

    def binding(self, *keys):
        bindings = self.pager.key_bindings.get_bindings_for_keys(keys)
        assert bindings, keys
        return bindings[-1]

    def test_height_follows_output(self):
        # DummyOutput reports 40 rows; one is the status line
        assert self.host.height(self.host.viewport_id) == 39

    @pytest.mark.parametrize("keys", [
        ('c-d',), ('c-u',), ('c-f',), ('c-b',),
        ('z', 't'), ('z', 'b'), ('z', 'z'),
        ('j',), ('k',), ('z', 'a'), ('z', 'o'), ('z', 'c'), ('q',),
    ])
    def test_key_bindings(self, keys):
        self.binding(*keys)

    def test_half_page_key(self):
        with patch.object(self.pager.controller, 'scroll') as scroll:
            self.binding('c-d').handler(Mock(arg=1, arg_present=False))
            self.binding('c-d').handler(Mock(arg=5, arg_present=True))

        vid = self.host.viewport_id
        assert scroll.call_args_list[0][0] == (vid, 19, None)
        assert scroll.call_args_list[1][0] == (vid, 5, None)

    def test_page_key_uses_count(self):
        with patch.object(self.pager.controller, 'scroll') as scroll:
            self.binding('c-f').handler(Mock(arg=2, arg_present=True))

        scroll.assert_called_once_with(self.host.viewport_id, 78, None)

    def test_cursor_keys(self):
        self.binding('j').handler(Mock(arg=3))
        assert self.host.get_cursor(self.host.viewport_id)[0] == 4

        self.binding('k').handler(Mock(arg=1))
        assert self.host.get_cursor(self.host.viewport_id)[0] == 3

    def test_status_line(self):
        text = self.pager._status_fragments()[0][1]
        assert "numbers" in text
        assert "line 1/200" in text

    def test_text_rows(self):
        fragments = self.pager._text_fragments()
        newlines = [text for _, text in fragments if text == '\n']
        assert len(newlines) == 39
