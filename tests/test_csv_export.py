from conftest import make_record

from gtsim_core.domain.models import Player
from gtsim_core.services.csv_export import csv_bytes, encode_csv, parse_csv

HEADER = "回合,A策略,A收益,B策略,B收益"


def test_single_round_example():
    record = make_record([{"step": 0, "playerChoices": {"1": "C", "2": "D"}, "payoffs": {"1": 3, "2": 1}}])
    assert encode_csv(record) == f"{HEADER}\n1,C,3,D,1\n"


def test_empty_results_is_header_only():
    text = encode_csv(make_record([]))
    assert text.splitlines() == [HEADER]


def test_line_and_field_counts(record):
    lines = encode_csv(record).splitlines()
    assert len(lines) == len(record.results) + 1
    for line in lines[1:]:
        assert len(line.split(",")) == 1 + 2 * len(record.players)


def test_rows_follow_roster_order_not_key_order():
    players = [{"id": 2, "name": "B"}, {"id": 1, "name": "A"}]
    record = make_record([{"step": 4, "playerChoices": {"1": "C", "2": "D"}, "payoffs": {"1": 3, "2": 0}}], players=players)
    assert encode_csv(record).splitlines() == ["回合,B策略,B收益,A策略,A收益", "5,D,0,C,3"]


def test_missing_player_entries_render_empty():
    record = make_record([{"step": 0, "playerChoices": {"1": "C"}, "payoffs": {"1": 2}}])
    assert encode_csv(record).splitlines()[1] == "1,C,2,,"


def test_integer_keys_are_found_too():
    record = make_record([{"step": 0, "playerChoices": {1: "C", 2: "D"}, "payoffs": {1: 3, 2: 1}}])
    assert encode_csv(record).splitlines()[1] == "1,C,3,D,1"


def test_numbers_are_locale_invariant():
    record = make_record(
        [{"step": 0, "playerChoices": {"1": "C", "2": "D"}, "payoffs": {"1": 1234567.0, "2": -0.25}}]
    )
    assert encode_csv(record).splitlines()[1] == "1,C,1234567,D,-0.25"


def test_empty_roster_still_encodes():
    record = make_record([{"step": 0, "playerChoices": {}, "payoffs": {}}], players=[])
    assert encode_csv(record).splitlines()[0] == "回合"


def test_delimiter_in_player_name_is_quoted():
    players = [{"id": 1, "name": "A,1"}, {"id": 2, "name": "B"}]
    record = make_record([{"step": 0, "playerChoices": {"1": "C", "2": "D"}, "payoffs": {"1": 3, "2": 1}}], players=players)
    text = encode_csv(record)
    assert text.splitlines()[0] == '回合,"A,1策略","A,1收益",B策略,B收益'
    parsed = parse_csv(text, [Player(**p) for p in players])
    assert parsed[0]["payoffs"] == {1: 3, 2: 1}


def test_bytes_start_with_bom(record):
    data = csv_bytes(encode_csv(record))
    assert data.startswith(b"\xef\xbb\xbf")
    assert data.decode("utf-8-sig").startswith(HEADER)


def test_parse_recovers_steps_choices_and_payoffs(record):
    parsed = parse_csv(csv_bytes(encode_csv(record)).decode("utf-8"), record.players)
    assert [r["step"] for r in parsed] == [0, 1, 2]
    for original, back in zip(record.results, parsed):
        for player in record.players:
            assert back["playerChoices"][player.id] == original.choice_for(player.id)
            assert back["payoffs"][player.id] == original.payoff_for(player.id)


def test_parse_drops_extra_round_fields():
    record = make_record(
        [{"step": 0, "playerChoices": {"1": "C", "2": "D"}, "payoffs": {"1": 3, "2": 1}, "note": "warmup"}]
    )
    parsed = parse_csv(encode_csv(record), record.players)
    assert "note" not in parsed[0]
