import pytest

from kanban_engine.domain.card_id import (card_id_sort_key, is_valid_card_id, next_card_id,
                                          parse_card_id)


class TestCardIdValidation:
    @pytest.mark.parametrize("value", ["A", "Z", "AA", "XYZ"])
    def test_uppercase_letters_are_valid(self, value):
        assert is_valid_card_id(value)
        assert parse_card_id(value) == value

    @pytest.mark.parametrize("value", ["", "a", "A1", "A B", "Ä", None, 1])
    def test_everything_else_is_rejected(self, value):
        assert not is_valid_card_id(value)
        assert parse_card_id(value) is None


class TestNextCardId:
    @pytest.mark.parametrize(
        "current, expected",
        [
            ("A", "B"),
            ("Y", "Z"),
            ("Z", "AA"),
            ("AA", "AB"),
            ("AZ", "BA"),
            ("ZZ", "AAA"),
            ("ZZZ", "AAAA"),
        ],
    )
    def test_carry_chain(self, current, expected):
        assert next_card_id(current) == expected

    def test_sort_key_orders_by_length_first(self):
        ids = ["AA", "Z", "B", "AAA", "AB"]
        assert sorted(ids, key=card_id_sort_key) == ["B", "Z", "AA", "AB", "AAA"]
