"""Tests for the layout context, paging and page decorations."""

import pytest

from formquill.engine.layout_context import FlowPage, ensure_space, initialize_layout, next_page
from formquill.exceptions import LayoutError
from formquill.styles import default_stylesheet


@pytest.fixture
def stylesheet():
    return default_stylesheet()


class TestInitializeLayout:
    def test_pages_and_cursor(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 3)
        assert ctx.page_count == 3
        assert ctx.current_page == 0
        assert ctx.cursor.x == stylesheet.margins.left
        assert ctx.cursor.y == stylesheet.page_size.height - stylesheet.margins.top
        assert all(isinstance(page, FlowPage) for page in ctx.pages)

    def test_at_least_one_page(self, stylesheet):
        assert initialize_layout(None, stylesheet, 0).page_count == 1

    def test_page_factory_receives_index_and_size(self, stylesheet):
        created = []
        initialize_layout(None, stylesheet, 2, lambda index, size: created.append((index, size)) or index)
        assert [index for index, _ in created] == [0, 1]
        assert created[0][1] == stylesheet.page_size

    def test_failing_page_factory_raises_layout_error(self, stylesheet):
        def broken(index, size):
            raise RuntimeError("no canvas")

        with pytest.raises(LayoutError):
            initialize_layout(None, stylesheet, 1, broken)

    def test_content_metrics(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 1)
        assert ctx.content_top == 792 - 72
        assert ctx.content_bottom == 60
        assert ctx.content_width == 612 - 100
        assert ctx.remaining_space == ctx.content_top - ctx.content_bottom


class TestPaging:
    def test_next_page_reuses_existing_pages(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 2)
        assert next_page(ctx) == 1
        assert ctx.page_count == 2

    def test_next_page_appends_at_the_end(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 1)
        ctx.cursor.y = 100
        assert next_page(ctx) == 1
        assert ctx.page_count == 2
        assert ctx.cursor.y == ctx.content_top

    def test_ensure_space_keeps_page_when_block_fits(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 1)
        assert ensure_space(ctx, 50) is False
        assert ctx.current_page == 0

    def test_ensure_space_breaks_when_block_overflows(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 1)
        ctx.cursor.y = ctx.content_bottom + 10
        assert ensure_space(ctx, 50) is True
        assert ctx.current_page == 1

    def test_oversized_block_stays_on_empty_page(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 1)
        assert ensure_space(ctx, 5000) is False
        assert ctx.page_count == 1


class TestPlacementsAndDecorators:
    def test_place_records_placement_and_drawn_element(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 1)
        placement = ctx.place("line", 0, 10, 20, 30, 1, "rule", role="divider")
        assert placement.role == "divider"
        assert ctx.drawn_elements[0].label == "rule"
        assert ctx.placements_for_page(0) == [placement]

    def test_untracked_placement_has_no_drawn_element(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 1)
        ctx.place("watermark", 0, 0, 0, 612, 792, "watermark", track=False)
        assert len(ctx.placements) == 1
        assert ctx.drawn_elements == []

    def test_decorator_applies_to_existing_and_new_pages(self, stylesheet):
        ctx = initialize_layout(None, stylesheet, 3)
        decorated = []
        ctx.add_page_decorator(lambda context, index: decorated.append(index), start_page=1)
        assert decorated == [1, 2]
        ctx.append_page()
        assert decorated == [1, 2, 3]
