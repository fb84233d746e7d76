import unittest

from picols.ast import Comment, Pos, SourceLocation
from picols.cartridge import split_lines
from picols.markers import comment_value
from picols.providers import FoldingRegion, FoldingRegionProvider
from tests.dsl import FakeDocument


def comment(line: int, raw: str) -> Comment:
    location = SourceLocation(Pos(line, 1), Pos(line, len(raw) + 1))
    return Comment(location, raw, comment_value(raw))


class TestTabRegions(unittest.TestCase):
    def test_tabs(self):
        doc = FakeDocument(
            "\n"
            "__lua__\n"
            "-- tab 1\n"
            "function a() end\n"
            "-->8\n"
            "-- tab 2\n"
            "function b() end\n"
            "-->8\n"
            "-- tab 3\n"
            "function c() end\n"
            "__gfx__\n"
        )

        self.assertEqual(
            doc.regions(),
            [
                FoldingRegion("0: tab 1", 2, 3),
                FoldingRegion("1: tab 2", 5, 6),
                FoldingRegion("2: tab 3", 8, 10),
            ],
        )

    def test_unnamed_tabs(self):
        doc = FakeDocument.dedent(
            """
            __lua__
            a = 1
            -->8
            b = 2
            """
        )

        # Without a `__gfx__` marker, the last tab runs to the end of the document.
        self.assertEqual(
            doc.regions(),
            [
                FoldingRegion("0: tab", 1, 1),
                FoldingRegion("1: tab", 3, 3),
            ],
        )

    def test_tabs_without_lua_section(self):
        doc = FakeDocument.dedent(
            """
            -->8
            -- first
            a = 1
            -->8
            b = 2
            """
        )

        self.assertEqual(
            doc.regions(),
            [
                FoldingRegion("0: first", 1, 2),
                FoldingRegion("1: tab", 4, 4),
            ],
        )

    def test_lua_section_without_tabs(self):
        doc = FakeDocument.dedent(
            """
            __lua__
            -- main
            a = 1
            __gfx__
            """
        )

        self.assertEqual(doc.regions(), [])

    def test_consecutive_separators(self):
        doc = FakeDocument.dedent(
            """
            -->8
            -->8
            a = 1
            """
        )

        self.assertEqual(
            [region.name for region in doc.regions()],
            ["0: tab", "1: tab"],
        )

    def test_separator_followed_by_empty_comment(self):
        doc = FakeDocument.dedent(
            """
            -->8
            --
            a = 1
            """
        )

        self.assertEqual(doc.regions(), [FoldingRegion("0: tab", 1, 2)])

    def test_tab_indices_follow_document_order(self):
        lines = split_lines("__lua__\n-- one\n-->8\n-- two\n-->8\n-- three\n-->8\n")
        comments = [
            comment(7, "-->8"),
            comment(6, "-- three"),
            comment(2, "-- one"),
            comment(5, "-->8"),
            comment(4, "-- two"),
            comment(3, "-->8"),
        ]

        self.assertEqual(
            FoldingRegionProvider().serve(lines, comments),
            [
                FoldingRegion("0: one", 1, 1),
                FoldingRegion("1: two", 3, 3),
                FoldingRegion("2: three", 5, 5),
                FoldingRegion("3: tab", 7, 7),
            ],
        )


class TestLabeledRegions(unittest.TestCase):
    def test_nested_regions(self):
        doc = FakeDocument.dedent(
            """
            -- #region My Region
            local a = 1
            local b = 2
            -- #endregion

            -- #region Another Region
            function foo()
              -- #region Nested Region
              print("hello")
              -- #endregion
            end
            -- #endregion
            """
        )

        self.assertEqual(
            doc.regions(),
            [
                FoldingRegion("My Region", 0, 3),
                FoldingRegion("Another Region", 5, 11),
                FoldingRegion("Nested Region", 7, 9),
            ],
        )

    def test_start_label(self):
        doc = FakeDocument.dedent(
            """
            -- #region MyLabeledRegion
            local a = 1
            -- #endregion
            """
        )

        self.assertEqual(doc.regions(), [FoldingRegion("MyLabeledRegion", 0, 2)])

    def test_end_label(self):
        doc = FakeDocument.dedent(
            """
            -- #region
            local a = 1
            -- #endregion MyEndRegion
            """
        )

        self.assertEqual(doc.regions(), [FoldingRegion("MyEndRegion", 0, 2)])

    def test_start_label_wins(self):
        doc = FakeDocument.dedent(
            """
            -- #region StartLabel
            local a = 1
            -- #endregion EndLabel
            """
        )

        self.assertEqual(doc.regions(), [FoldingRegion("StartLabel", 0, 2)])

    def test_default_name(self):
        doc = FakeDocument.dedent(
            """
            -- #region
            local a = 1
            -- #endregion
            """
        )

        self.assertEqual(doc.regions(), [FoldingRegion("region", 0, 2)])

    def test_deeply_nested_regions(self):
        doc = FakeDocument.dedent(
            """
            -- #region Outer
              -- #region Middle
                -- #region Inner
                local x = 1
                -- #endregion Inner
              -- #endregion Middle
            -- #endregion Outer
            """
        )

        self.assertEqual(
            doc.regions(),
            [
                FoldingRegion("Outer", 0, 6),
                FoldingRegion("Middle", 1, 5),
                FoldingRegion("Inner", 2, 4),
            ],
        )

    def test_block_comment_markers(self):
        doc = FakeDocument.dedent(
            """
            --[[ #region Block ]]
            local a = 1
            --[==[#endregion]==]
            """
        )

        self.assertEqual(doc.regions(), [FoldingRegion("Block", 0, 2)])

    def test_markers_must_start_the_comment(self):
        doc = FakeDocument.dedent(
            """
            -- see #region
            local a = 1
            -- see #endregion
            """
        )

        self.assertEqual(doc.regions(), [])

    def test_unmatched_end_marker(self):
        doc = FakeDocument.dedent(
            """
            -- #endregion
            local a = 1
            -- #region R
            local b = 2
            -- #endregion
            """
        )

        self.assertEqual(doc.regions(), [FoldingRegion("R", 2, 4)])

    def test_unclosed_region(self):
        doc = FakeDocument.dedent(
            """
            -- #region UnclosedRegion
            local a = 1
            local b = 2
            """
        )

        # Unlike closed regions, an unclosed region starts at the line below its
        # `#region` marker.
        self.assertEqual(doc.regions(), [FoldingRegion("UnclosedRegion", 1, 2)])

    def test_unclosed_nested_regions(self):
        doc = FakeDocument.dedent(
            """
            -- #region Outer
            -- #region Inner
            local a = 1
            """
        )

        self.assertEqual(
            doc.regions(),
            [
                FoldingRegion("Outer", 1, 2),
                FoldingRegion("Inner", 2, 2),
            ],
        )

    def test_regions_inside_tabs(self):
        doc = FakeDocument.dedent(
            """
            __lua__
            -- main
            -- #region init
            a = 1
            -- #endregion
            -->8
            -- other
            b = 2
            __gfx__
            """
        )

        self.assertEqual(
            doc.regions(),
            [
                FoldingRegion("0: main", 1, 4),
                FoldingRegion("init", 2, 4),
                FoldingRegion("1: other", 6, 8),
            ],
        )


class TestFoldingRegion(unittest.TestCase):
    def test_to_folding_range(self):
        folding_range = FoldingRegion("0: main", 1, 3).to_folding_range()
        self.assertEqual(folding_range.start_line, 1)
        self.assertEqual(folding_range.end_line, 3)
        self.assertEqual(folding_range.collapsed_text, "0: main")
