# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest

from synergy.errors import ValidationFailure
from synergy.notes.blocks import (
    RICH_MEDIA_PLACEHOLDER,
    BlockKindError,
    CellOutOfRange,
    ChartBlock,
    TableBlock,
    TextBlock,
    add_block,
    append_table_row,
    make_block,
    parse,
    preview,
    prune_for_save,
    remove_block,
    serialize,
    update_block_content,
    update_table_cell,
    validate_blocks,
)


class TestParse(unittest.TestCase):
    def test_empty_string_is_one_empty_text_block(self) -> None:
        blocks = parse("")
        self.assertEqual(len(blocks), 1)
        self.assertIsInstance(blocks[0], TextBlock)
        self.assertEqual(blocks[0].content, "")

    def test_empty_array_is_empty(self) -> None:
        self.assertEqual(parse("[]"), [])

    def test_legacy_and_foreign_content_degrade_to_text(self) -> None:
        for raw in ("Buy milk\nand eggs", '{"a": 1}', "42", '[{"id": "x", "type": "video"}]', "[1, 2"):
            with self.subTest(raw=raw):
                blocks = parse(raw)
                self.assertEqual(len(blocks), 1)
                self.assertIsInstance(blocks[0], TextBlock)
                self.assertEqual(blocks[0].content, raw)

    def test_ragged_table_degrades_to_text(self) -> None:
        raw = json.dumps([{"id": "t", "type": "table", "content": [["a", "b"], ["c"]]}])
        self.assertIsInstance(parse(raw)[0], TextBlock)

    def test_duplicate_ids_are_renumbered(self) -> None:
        raw = json.dumps([
            {"id": "same", "type": "text", "content": "one"},
            {"id": "same", "type": "text", "content": "two"},
        ])
        blocks = parse(raw)
        self.assertEqual([b.content for b in blocks], ["one", "two"])
        self.assertEqual(blocks[0].id, "same")
        self.assertNotEqual(blocks[1].id, "same")

    def test_null_chart_value_reads_as_zero(self) -> None:
        raw = json.dumps([
            {"id": "1", "type": "text", "content": "Budget"},
            {"id": "2", "type": "chart", "content": [{"name": "A", "value": None}, {"name": "B", "value": 3}]},
        ])
        blocks = parse(raw)
        self.assertEqual([type(b) for b in blocks], [TextBlock, ChartBlock])
        self.assertEqual([p.value for p in blocks[1].content], [0.0, 3.0])
        resaved = json.loads(serialize(blocks))
        self.assertEqual(resaved[0], {"id": "1", "type": "text", "content": "Budget"})
        self.assertEqual(resaved[1]["content"][0], {"name": "A", "value": 0.0})

    def test_non_numeric_chart_value_still_degrades_to_text(self) -> None:
        raw = json.dumps([{"id": "c", "type": "chart", "content": [{"name": "A", "value": "lots"}]}])
        self.assertIsInstance(parse(raw)[0], TextBlock)


class TestRoundTrip(unittest.TestCase):
    def test_mutator_output_round_trips(self) -> None:
        blocks = add_block([], "text", "naïve café 😀\n  two spaces\ttab")
        blocks = add_block(blocks, "table")
        blocks = add_block(blocks, "chart")
        blocks = add_block(blocks, "image", "data:image/png;base64,iVBORw0KGgo=")
        table_id = blocks[1].id
        blocks = append_table_row(blocks, table_id)
        blocks = update_table_cell(blocks, table_id, 2, 1, "x, \"quoted\"")

        again = parse(serialize(blocks))
        self.assertEqual(again, blocks)
        self.assertEqual(again[0].content, "naïve café 😀\n  two spaces\ttab")
        self.assertEqual(serialize(again), serialize(blocks))

    def test_defaults_for_new_blocks(self) -> None:
        table = make_block("table")
        chart = make_block("chart")
        self.assertIsInstance(table, TableBlock)
        self.assertEqual(table.content, [["Header 1", "Header 2"], ["Data 1", "Data 2"]])
        self.assertIsInstance(chart, ChartBlock)
        self.assertEqual([(p.name, p.value) for p in chart.content], [("Item A", 50), ("Item B", 30)])

    def test_make_block_rejects_bad_content(self) -> None:
        with self.assertRaises(ValidationFailure):
            make_block("table", [["a"], ["b", "c"]])
        with self.assertRaises(ValidationFailure):
            make_block("video", "x")
        with self.assertRaises(ValidationFailure):
            make_block("image")


class TestMutators(unittest.TestCase):
    def setUp(self) -> None:
        self.text = make_block("text", "hello", block_id="t1")
        self.table = make_block("table", block_id="tb")
        self.blocks = [self.text, self.table]

    def test_inputs_are_not_mutated(self) -> None:
        before = serialize(self.blocks)
        update_block_content(self.blocks, "t1", "changed")
        append_table_row(self.blocks, "tb")
        remove_block(self.blocks, "t1")
        self.assertEqual(serialize(self.blocks), before)

    def test_unknown_id_is_a_noop(self) -> None:
        self.assertEqual(update_block_content(self.blocks, "nope", "x"), self.blocks)
        self.assertEqual(remove_block(self.blocks, "nope"), self.blocks)
        self.assertEqual(append_table_row(self.blocks, "nope"), self.blocks)
        self.assertEqual(update_table_cell(self.blocks, "nope", 0, 0, "x"), self.blocks)

    def test_append_row_matches_width(self) -> None:
        out = append_table_row(self.blocks, "tb")
        self.assertEqual(out[1].content[-1], ["", ""])
        self.assertEqual(len(out[1].content), 3)

    def test_table_ops_on_text_block(self) -> None:
        with self.assertRaises(BlockKindError):
            append_table_row(self.blocks, "t1")
        with self.assertRaises(BlockKindError):
            update_table_cell(self.blocks, "t1", 0, 0, "x")

    def test_cell_out_of_range(self) -> None:
        for row, col in ((2, 0), (0, 2), (-1, 0)):
            with self.subTest(row=row, col=col):
                with self.assertRaises(CellOutOfRange):
                    update_table_cell(self.blocks, "tb", row, col, "x")

    def test_remove_keeps_order(self) -> None:
        third = make_block("text", "third", block_id="t3")
        out = remove_block([*self.blocks, third], "tb")
        self.assertEqual([b.id for b in out], ["t1", "t3"])

    def test_validate_blocks_is_strict(self) -> None:
        raw = [{"id": "a", "type": "text", "content": "x"}, {"id": "a", "type": "text", "content": "y"}]
        with self.assertRaises(ValidationFailure):
            validate_blocks(raw)
        with self.assertRaises(ValidationFailure):
            validate_blocks([{"id": "a", "type": "chart", "content": [{"name": "n", "value": "lots"}]}])
        with self.assertRaises(ValidationFailure):
            validate_blocks([{"id": "a", "type": "chart", "content": [{"name": "n", "value": None}]}])
        self.assertEqual(len(validate_blocks(raw[:1])), 1)


class TestSaveHelpers(unittest.TestCase):
    def test_prune_drops_blank_text_only(self) -> None:
        blank = make_block("text", "  \n")
        table = make_block("table")
        self.assertEqual(prune_for_save([blank, table, blank]), [table])
        self.assertEqual(prune_for_save([blank]), [blank])


class TestPreview(unittest.TestCase):
    def test_text_only(self) -> None:
        self.assertEqual(preview(serialize([make_block("text", "Hello\n\n  world")])), "Hello world")

    def test_long_text_truncates(self) -> None:
        out = preview(serialize([make_block("text", "a" * 150)]))
        self.assertEqual(out, "a" * 100 + "...")

    def test_media_only(self) -> None:
        self.assertEqual(preview(serialize([make_block("chart")])), RICH_MEDIA_PLACEHOLDER)

    def test_text_plus_media(self) -> None:
        raw = serialize([make_block("text", ""), make_block("table"), make_block("text", "Summary")])
        self.assertEqual(preview(raw), "Summary...")

    def test_null_chart_value_keeps_structure(self) -> None:
        raw = json.dumps([
            {"id": "1", "type": "text", "content": "Budget"},
            {"id": "2", "type": "chart", "content": [{"name": "A", "value": None}]},
        ])
        self.assertEqual(preview(raw), "Budget...")

    def test_legacy_and_empty(self) -> None:
        self.assertEqual(preview("plain old note"), "plain old note")
        self.assertEqual(preview(""), "")
        self.assertEqual(preview("[]"), "")


if __name__ == "__main__":
    unittest.main()
