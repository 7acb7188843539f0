"""Tests for the local scheme knowledge base."""

import pytest

from gramabot.core.knowledge import (
    AYUSHMAN,
    PM_KISAN,
    SchemeRecord,
    find_scheme,
    format_scheme,
    lookup,
)


class TestFindScheme:
    @pytest.mark.parametrize(
        "query",
        [
            "tell me about pm-kisan",
            "PM-KISAN installment dates",
            "What is PM-Kisan?",
        ],
    )
    def test_direct_match_pm_kisan(self, query):
        assert find_scheme(query) is PM_KISAN

    @pytest.mark.parametrize(
        "query",
        [
            "ayushman card",
            "Ayushman Bharat - PMJAY hospitals",
            "how do I use AYUSHMAN",
        ],
    )
    def test_direct_match_ayushman(self, query):
        assert find_scheme(query) is AYUSHMAN

    def test_category_farmer(self):
        assert find_scheme("I am a farmer, what schemes can I get") is PM_KISAN

    def test_category_agriculture(self):
        assert find_scheme("agriculture support") is PM_KISAN

    def test_category_health_and_insurance(self):
        assert find_scheme("health cover for my family") is AYUSHMAN
        assert find_scheme("cheap insurance") is AYUSHMAN

    def test_direct_match_beats_category(self):
        # "farmer" would pick PM-KISAN, but the direct key match comes first.
        assert find_scheme("ayushman for a farmer") is AYUSHMAN

    def test_farmer_category_checked_before_health(self):
        assert find_scheme("health of a farmer") is PM_KISAN

    def test_no_match(self):
        assert find_scheme("what is the capital of France") is None

    @pytest.mark.parametrize("query", ["", None])
    def test_empty_query(self, query):
        assert find_scheme(query) is None


class TestFormatScheme:
    def test_exact_layout(self):
        assert format_scheme(PM_KISAN) == (
            "1. **PM-KISAN**\n"
            "• 🌱 Eligibility: Small & marginal farmers with cultivable land\n"
            "• 💰 Benefits: ₹6,000/year (paid as installments)\n"
            "• 📝 How to Apply: Register at pmkisan.gov.in or visit CSC\n"
            "• 🔗 Official Website: pmkisan.gov.in"
        )

    def test_missing_fields_render_empty(self):
        text = format_scheme(SchemeRecord(key="x", title="Some Scheme"))
        assert text.splitlines() == [
            "1. **Some Scheme**",
            "• 🌱 Eligibility: ",
            "• 💰 Benefits: ",
            "• 📝 How to Apply: ",
            "• 🔗 Official Website: ",
        ]


class TestLookup:
    def test_farmer_query_returns_pm_kisan_block(self):
        answer = lookup("I am a farmer, what schemes can I get")
        assert answer is not None
        assert answer.startswith("1. **PM-KISAN**")

    def test_unknown_returns_none(self):
        assert lookup("recipe for biryani") is None

    def test_deterministic_regardless_of_call_order(self):
        queries = ["health", "farmer", "nothing here", "ayushman", "pm-kisan"]
        first = [lookup(q) for q in queries]
        second = [lookup(q) for q in reversed(queries)][::-1]
        assert first == second
