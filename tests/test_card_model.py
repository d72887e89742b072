# tests/test_card_model.py
from gastos.domain.models.card import is_valid_card_number, mask_card_number


class TestMaskCardNumber:
    def test_sixteen_digits(self):
        assert mask_card_number("4111111111111111") == "**** **** **** 1111"

    def test_keeps_only_last_four(self):
        masked = mask_card_number("5500000000000004")
        assert masked.endswith("0004")
        assert masked.replace(" ", "").count("*") == 12

    def test_short_input_is_fully_masked(self):
        assert mask_card_number("123") == "****"
        assert mask_card_number(None) == "****"

    def test_groups_are_separated_by_single_spaces(self):
        masked = mask_card_number("4111111111111")
        assert "  " not in masked
        assert masked.replace(" ", "") == "*********1111"


class TestIsValidCardNumber:
    def test_accepts_13_to_19_digits(self):
        assert is_valid_card_number("4" * 13)
        assert is_valid_card_number("4" * 19)

    def test_rejects_other_lengths_and_letters(self):
        assert not is_valid_card_number("4" * 12)
        assert not is_valid_card_number("4" * 20)
        assert not is_valid_card_number("4111-1111-1111-1111")
        assert not is_valid_card_number("")
