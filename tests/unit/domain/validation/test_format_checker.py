"""Unit tests for the FormatChecker grammar."""

import pytest

from unmessy.domain.validation.service import FormatChecker


@pytest.fixture
def checker() -> FormatChecker:
    return FormatChecker()


class TestFormatChecker:
    @pytest.mark.parametrize(
        "address",
        [
            "test@gmail.com",
            "first.last@sub.example.co.uk",
            "o'brien@company.ie",
            "user+tag@domain.com",
            "x@a-b.io",
            "1234@numbers.net",
        ],
    )
    def test_accepts_well_formed(self, checker: FormatChecker, address: str):
        assert checker.is_valid(address)
        assert checker.problem(address) is None

    @pytest.mark.parametrize(
        "address",
        [
            "not-an-email",
            "",
            "@domain.com",
            "user@",
            "a@@domain.com",
            "a@b@domain.com",
            ".lead@domain.com",
            "trail.@domain.com",
            "dou..ble@domain.com",
            "sp ace@domain.com",
            "user@localhost",
            "user@-dash.com",
            "user@dash-.com",
            "user@dom..com",
            "user@domain.c",
            "user@domain.c0m",
            "user@domain.123",
            "user@dom_ain.com",
        ],
    )
    def test_rejects_malformed(self, checker: FormatChecker, address: str):
        assert not checker.is_valid(address)
        assert checker.problem(address)

    def test_local_part_length_limit(self, checker: FormatChecker):
        assert checker.is_valid("a" * 64 + "@domain.com")
        assert not checker.is_valid("a" * 65 + "@domain.com")

    def test_label_length_limit(self, checker: FormatChecker):
        assert checker.is_valid("a@" + "b" * 63 + ".com")
        assert not checker.is_valid("a@" + "b" * 64 + ".com")

    def test_total_length_limit(self, checker: FormatChecker):
        domain = ".".join(["d" * 60] * 4) + ".com"  # 247 characters
        assert checker.is_valid("abcdef@" + domain)  # 254
        assert not checker.is_valid("abcdefg@" + domain)  # 255

    def test_problem_names_the_rule(self, checker: FormatChecker):
        assert checker.problem("dou..ble@domain.com") == "local part has a misplaced dot"
        assert checker.problem("not-an-email") == "address must contain exactly one @"
