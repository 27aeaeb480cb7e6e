from __future__ import annotations

import pytest

from typstable.core.models import Cell, CellPosition, ColumnSpec, RowStroke, TableModel
from typstable.core.table import (
    TableBoundsError,
    TableShapeError,
    create_empty_table,
    create_table_model,
    get_table_dimensions,
    insert_column,
    insert_row,
    normalize_cell,
    normalize_stroke_value,
    normalize_table_model,
    patch_cell,
    patch_cells,
    remove_column,
    remove_row,
    set_caption,
    set_column_align,
    set_header_rows,
    set_strokes,
    update_cell,
    update_column_spec,
    update_column_stroke,
    update_row_stroke,
)


def _texts(model: TableModel) -> list:
    return [[cell.text for cell in row] for row in model.rows]


def test_create_empty_table_builds_blank_grid():
    model = create_empty_table(2, 3)

    assert get_table_dimensions(model) == (2, 3)
    assert all(cell == Cell() for row in model.rows for cell in row)
    assert model.header_rows is None
    assert model.caption is None
    assert model.column_specs is None
    assert model.strokes is None


@pytest.mark.parametrize("rows, columns", [(0, 3), (3, 0), (-1, 2), (2, 1.5)])
def test_create_empty_table_rejects_non_positive_dimensions(rows, columns):
    with pytest.raises(TableShapeError):
        create_empty_table(rows, columns)


def test_create_empty_table_clamps_header_rows():
    model = create_empty_table(2, 2, header_rows=5, caption="Totals")

    assert model.header_rows == 2
    assert model.caption == "Totals"


def test_create_table_model_pads_ragged_rows():
    model = create_table_model({"rows": [["a"], ["b", "c", "d"], []]})

    assert get_table_dimensions(model) == (3, 3)
    assert _texts(model) == [["a", "", ""], ["b", "c", "d"], ["", "", ""]]


def test_create_table_model_accepts_camel_case_keys():
    model = create_table_model(
        {
            "rows": [["a", "b"], ["c", "d"]],
            "headerRows": 1,
            "columnSpecs": [{"width": 40}],
        }
    )

    assert model.header_rows == 1
    assert model.column_specs == [ColumnSpec(width=40), ColumnSpec()]


def test_create_table_model_requires_rows_and_columns():
    with pytest.raises(TableShapeError, match="at least one row"):
        create_table_model({"rows": []})
    with pytest.raises(TableShapeError, match="at least one column"):
        create_table_model({"rows": [[], []]})


def test_normalize_clamps_header_rows_and_drops_empty_values():
    model = normalize_table_model(
        {
            "rows": [["a"], ["b"]],
            "header_rows": -3,
            "caption": "",
            "column_specs": [{"width": -4, "align": "justify"}],
            "strokes": {"rows": [{"top": 0}, {"bottom": float("nan")}], "columns": []},
        }
    )

    assert model.header_rows is None
    assert model.caption is None
    assert model.column_specs is None
    assert model.strokes is None


def test_normalize_keeps_none_stroke_and_sizes_arrays():
    model = normalize_table_model(
        {
            "rows": [["a", "b"], ["c", "d"], ["e", "f"]],
            "strokes": {"rows": [{"top": "none"}, {"bottom": 2}, {}, {"top": 9}]},
        }
    )

    assert model.strokes.rows == [
        RowStroke(top="none"),
        RowStroke(bottom=2),
        RowStroke(),
    ]
    assert model.strokes.columns is None


def test_normalize_is_idempotent(metrics_table):
    once = normalize_table_model(metrics_table)

    assert normalize_table_model(once) == once
    assert once == metrics_table


def test_normalize_does_not_mutate_input():
    raw = {"rows": [["a"], ["b", "c"]], "header_rows": 9}

    normalize_table_model(raw)

    assert raw == {"rows": [["a"], ["b", "c"]], "header_rows": 9}


def test_normalize_cell_coerces_loose_values():
    assert normalize_cell(None) == Cell()
    assert normalize_cell("x") == Cell(text="x")
    assert normalize_cell({"text": 5, "align": "middle", "bold": 1}) == Cell(text="5", bold=True)


@pytest.mark.parametrize(
    "value, expected",
    [("none", "none"), (1, 1), (0.5, 0.5), (0, None), (-1, None), (True, None), ("2", None)],
)
def test_normalize_stroke_value(value, expected):
    assert normalize_stroke_value(value) == expected


def test_update_cell_replaces_one_cell(metrics_table):
    updated = update_cell(
        metrics_table, CellPosition(1, 1), lambda cell: cell.model_copy(update={"text": "9 ms"})
    )

    assert updated.rows[1][1].text == "9 ms"
    assert metrics_table.rows[1][1].text == "12 ms"


def test_update_cell_accepts_tuple_and_mapping_positions():
    model = create_empty_table(2, 2)

    by_tuple = update_cell(model, (0, 1), lambda cell: {"text": "t"})
    by_mapping = update_cell(model, {"rowIndex": 1, "columnIndex": 0}, lambda cell: {"text": "m"})

    assert by_tuple.rows[0][1].text == "t"
    assert by_mapping.rows[1][0].text == "m"


def test_update_cell_updater_cannot_mutate_original():
    model = create_empty_table(1, 1)

    def mutate(cell):
        cell.text = "changed"
        return cell

    updated = update_cell(model, (0, 0), mutate)

    assert updated.rows[0][0].text == "changed"
    assert model.rows[0][0].text == ""


@pytest.mark.parametrize("position", [(2, 0), (0, 2), (-1, 0), (0, True)])
def test_update_cell_rejects_out_of_bounds(position):
    model = create_empty_table(2, 2)

    with pytest.raises(TableBoundsError):
        update_cell(model, position, lambda cell: cell)


def test_patch_cell_merges_fields():
    model = create_table_model({"rows": [[{"text": "x", "italic": True}]]})

    updated = patch_cell(model, (0, 0), {"bold": True}, align="center")

    assert updated.rows[0][0] == Cell(text="x", bold=True, italic=True, align="center")


def test_insert_row_pads_provided_row():
    model = create_empty_table(2, 3)

    updated = insert_row(model, 1, ["x"])

    assert get_table_dimensions(updated) == (3, 3)
    assert _texts(updated)[1] == ["x", "", ""]


def test_insert_row_appends_at_row_count():
    model = create_empty_table(2, 2)

    updated = insert_row(model, 2, ["a", "b", "c"])

    assert _texts(updated)[-1] == ["a", "b"]


def test_insert_row_rejects_index_past_end():
    with pytest.raises(TableBoundsError, match="for insertion"):
        insert_row(create_empty_table(2, 2), 3)


def test_insert_row_inside_header_grows_header():
    model = create_empty_table(4, 1, header_rows=2)

    assert insert_row(model, 0).header_rows == 3
    assert insert_row(model, 2).header_rows == 3
    assert insert_row(model, 3).header_rows == 2


def test_insert_row_without_header_keeps_no_header():
    model = create_empty_table(2, 1)

    assert insert_row(model, 0).header_rows is None


def test_remove_row_inside_header_shrinks_header():
    model = create_empty_table(4, 1, header_rows=2)

    assert remove_row(model, 1).header_rows == 1
    assert remove_row(model, 2).header_rows == 2


def test_remove_row_keeps_last_row():
    with pytest.raises(TableShapeError):
        remove_row(create_empty_table(1, 2), 0)


def test_row_strokes_follow_row_edits():
    model = update_row_stroke(create_empty_table(3, 1), 1, {"bottom": 2})

    inserted = insert_row(model, 0)
    removed = remove_row(model, 0)

    assert inserted.strokes.rows == [RowStroke(), RowStroke(), RowStroke(bottom=2), RowStroke()]
    assert removed.strokes.rows == [RowStroke(bottom=2), RowStroke()]


def test_removing_row_with_only_stroke_clears_strokes():
    model = update_row_stroke(create_empty_table(3, 1), 1, {"top": 1})

    assert remove_row(model, 1).strokes is None


def test_insert_column_uses_provided_cells():
    model = create_table_model({"rows": [["a", "b"], ["c", "d"]]})

    updated = insert_column(model, 1, ["x"])

    assert _texts(updated) == [["a", "x", "b"], ["c", "", "d"]]


def test_column_specs_and_strokes_follow_column_edits():
    model = update_column_spec(create_empty_table(1, 3), 2, {"width": 30, "align": "right"})
    model = update_column_stroke(model, 0, {"left": 1})

    inserted = insert_column(model, 1)
    removed = remove_column(model, 0)

    assert inserted.column_specs[3] == ColumnSpec(width=30, align="right")
    assert len(inserted.strokes.columns) == 4
    assert inserted.strokes.columns[0].left == 1
    assert removed.column_specs == [ColumnSpec(), ColumnSpec(width=30, align="right")]
    assert removed.strokes is None


def test_remove_column_keeps_last_column():
    with pytest.raises(TableShapeError):
        remove_column(create_empty_table(2, 1), 0)


def test_remove_column_rejects_out_of_bounds():
    with pytest.raises(TableBoundsError, match="expected 0 to 1"):
        remove_column(create_empty_table(1, 2), 2)


def test_set_header_rows_clamps():
    model = create_empty_table(3, 1)

    assert set_header_rows(model, 10).header_rows == 3
    assert set_header_rows(model, -1).header_rows is None
    assert set_header_rows(set_header_rows(model, 2), None).header_rows is None


def test_set_caption_clears_empty_caption():
    model = set_caption(create_empty_table(1, 1), "Results")

    assert model.caption == "Results"
    assert set_caption(model, "").caption is None
    assert set_caption(model, None).caption is None


def test_update_column_spec_none_clears_specs():
    model = update_column_spec(create_empty_table(1, 2), 0, {"width": "auto"})

    assert model.column_specs == [ColumnSpec(width="auto"), ColumnSpec()]
    assert update_column_spec(model, 0, None).column_specs is None


def test_set_column_align_drops_cell_overrides():
    model = create_table_model(
        {"rows": [[{"text": "a", "align": "center"}], [{"text": "b", "align": "left"}]]}
    )

    updated = set_column_align(model, 0, "right")

    assert updated.column_specs == [ColumnSpec(align="right")]
    assert [row[0].align for row in updated.rows] == [None, None]


def test_stroke_updates_reject_out_of_bounds():
    model = create_empty_table(2, 2)

    with pytest.raises(TableBoundsError):
        update_row_stroke(model, 2, {"top": 1})
    with pytest.raises(TableBoundsError):
        update_column_stroke(model, -1, {"left": 1})


def test_set_strokes_replaces_configuration():
    model = update_row_stroke(create_empty_table(2, 2), 0, {"top": 1})

    updated = set_strokes(model, {"columns": [{"right": 0.5}]})

    assert updated.strokes.rows is None
    assert updated.strokes.columns[0].right == 0.5
    assert set_strokes(updated, None).strokes is None


def test_patch_cell_rejects_unknown_fields():
    model = create_empty_table(1, 1)

    with pytest.raises(TypeError, match="colour"):
        patch_cell(model, (0, 0), colour="red")
    with pytest.raises(TypeError, match="weight"):
        patch_cell(model, (0, 0), {"weight": "heavy"})


def test_patch_cells_applies_one_patch_to_every_position():
    model = create_empty_table(2, 2)

    updated = patch_cells(model, [(0, 1), CellPosition(1, 0)], {"italic": True})

    assert [[cell.italic for cell in row] for row in updated.rows] == [
        [None, True],
        [True, None],
    ]


def test_patch_cells_validates_every_position_first():
    with pytest.raises(TableBoundsError):
        patch_cells(create_empty_table(2, 2), [(0, 0), (5, 0)], {"bold": True})


def test_non_list_column_specs_are_ignored():
    model = normalize_table_model({"rows": [["a"]], "columnSpecs": 5})

    assert model.column_specs is None
    assert _texts(model) == [["a"]]


@pytest.mark.parametrize("strokes", [{"rows": 3}, {"columns": "thick"}, {"rows": 3, "columns": 1}])
def test_non_list_stroke_entries_are_ignored(strokes):
    model = normalize_table_model({"rows": [["a", "b"]], "strokes": strokes})

    assert model.strokes is None


def test_non_list_stroke_rows_keep_valid_columns():
    model = normalize_table_model(
        {"rows": [["a", "b"]], "strokes": {"rows": 3, "columns": [{"left": 1}]}}
    )

    assert model.strokes.rows is None
    assert model.strokes.columns[0].left == 1


def _styled_table() -> TableModel:
    return create_table_model(
        {
            "rows": [["Name", "Qty", "Price"], ["Bolt", "4", "0.20"], ["Nut", "9", "0.05"]],
            "header_rows": 1,
            "caption": "Parts",
            "column_specs": [{"width": 60}, None, {"align": "right"}],
            "strokes": {
                "rows": [{"bottom": 1}, None, {"bottom": 0.5}],
                "columns": [None, {"left": 0.5, "right": 0.5}, None],
            },
        }
    )


@pytest.mark.parametrize("row_index", [0, 1, 2, 3])
def test_insert_then_remove_row_restores_table(row_index):
    model = _styled_table()

    assert remove_row(insert_row(model, row_index), row_index) == model


@pytest.mark.parametrize("column_index", [0, 1, 2, 3])
def test_insert_then_remove_column_restores_table(column_index):
    model = _styled_table()

    assert remove_column(insert_column(model, column_index), column_index) == model


def _assert_well_formed(model: TableModel) -> None:
    row_count, column_count = get_table_dimensions(model)
    assert row_count >= 1 and column_count >= 1
    assert all(len(row) == column_count for row in model.rows)
    assert model.header_rows is None or 0 < model.header_rows <= row_count
    if model.column_specs is not None:
        assert len(model.column_specs) == column_count
    if model.strokes is not None:
        if model.strokes.rows is not None:
            assert len(model.strokes.rows) == row_count
        if model.strokes.columns is not None:
            assert len(model.strokes.columns) == column_count


def test_chained_edits_keep_table_well_formed():
    edits = [
        lambda m: insert_row(m, 0, ["Top"]),
        lambda m: insert_column(m, 3, ["x", "y"]),
        lambda m: update_row_stroke(m, 2, {"top": 2}),
        lambda m: remove_row(m, 1),
        lambda m: set_header_rows(m, 9),
        lambda m: update_column_spec(m, 1, {"width": 20}),
        lambda m: remove_column(m, 0),
        lambda m: update_column_stroke(m, 2, {"right": 1}),
        lambda m: patch_cell(m, (0, 0), bold=True),
        lambda m: remove_row(m, 0),
        lambda m: insert_column(m, 0),
        lambda m: set_column_align(m, 0, "center"),
        lambda m: remove_column(m, 3),
        lambda m: remove_row(m, 1),
    ]

    model = _styled_table()
    _assert_well_formed(model)
    for edit in edits:
        model = edit(model)
        _assert_well_formed(model)
        assert normalize_table_model(model) == model

    assert get_table_dimensions(model) == (1, 3)
