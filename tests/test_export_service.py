"""Tests for CSV export."""

from sena_simulator.services.export_service import rows_to_csv


def test_header_and_rows():
    text = rows_to_csv([(1, 2, 3, 4, 5, 6), (7, 8, 9, 10, 11, 12)])
    assert text.split("\n") == [
        "Column_1,Column_2,Column_3,Column_4,Column_5,Column_6",
        "1,2,3,4,5,6",
        "7,8,9,10,11,12",
    ]


def test_empty_rows():
    assert rows_to_csv([]) == ""


def test_generated_games_survive_export(draw_service):
    games = draw_service.generate_games(40, 12)
    lines = rows_to_csv(games).split("\n")

    assert lines[0] == ",".join(f"Column_{i}" for i in range(1, 13))
    rebuilt = [tuple(int(cell) for cell in line.split(",")) for line in lines[1:]]
    assert rebuilt == games
