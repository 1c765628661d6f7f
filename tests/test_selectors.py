"""Tests for quote matching and selector computation."""

import pytest

from anchoring.config import MATCH_THRESHOLD, NO_CONTEXT_THRESHOLD
from anchoring.models import MatchContext, StringMatch
from anchoring.selectors import (
    compute_selector,
    match_quote,
    rank_candidates,
    score_candidate,
)

FOX = "The quick brown fox jumps over the lazy dog"

# 50 distinct characters, so shifted alignments never beat the full one
PATTERN = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWX"


def with_substitutions(text: str, positions: list[int]) -> str:
    chars = list(text)
    for pos in positions:
        chars[pos] = "*"
    return "".join(chars)


class TestComputeSelector:
    """Tests for compute_selector."""

    def test_concrete_scenario(self) -> None:
        selector = compute_selector(FOX, "brown fox")

        assert selector is not None
        assert selector.exact == "brown fox"
        assert selector.start_offset == 10
        assert selector.end_offset == 19
        assert selector.prefix == "The quick "
        assert selector.suffix == " jumps over the lazy dog"

    def test_context_is_limited_to_32_characters(self) -> None:
        text = "x" * 50 + "needle" + "y" * 50
        selector = compute_selector(text, "needle")

        assert selector is not None
        assert selector.prefix == "x" * 32
        assert selector.suffix == "y" * 32

    def test_quote_at_document_edges(self) -> None:
        selector = compute_selector("needle", "needle")

        assert selector is not None
        assert selector.prefix == ""
        assert selector.suffix == ""
        assert (selector.start_offset, selector.end_offset) == (0, 6)

    def test_exact_quote_is_verbatim(self) -> None:
        quote = "over the lazy"
        selector = compute_selector(FOX, quote)

        assert selector is not None
        assert selector.exact == quote
        assert FOX[selector.start_offset : selector.end_offset] == quote

    def test_idempotent(self) -> None:
        first = compute_selector(FOX, "lazy dog")
        second = compute_selector(FOX, "lazy dog")
        assert first == second

    def test_hint_confirms_later_occurrence(self) -> None:
        selector = compute_selector("abc abc", "abc", start_hint=4)

        assert selector is not None
        assert selector.start_offset == 4

    def test_wrong_hint_falls_back_to_first_occurrence(self) -> None:
        selector = compute_selector("abc abc", "abc", start_hint=1)

        assert selector is not None
        assert selector.start_offset == 0

    @pytest.mark.parametrize("hint", [-1, 100])
    def test_out_of_range_hint_falls_back(self, hint: int) -> None:
        selector = compute_selector("abc abc", "abc", start_hint=hint)

        assert selector is not None
        assert selector.start_offset == 0

    def test_fuzzy_fallback_uses_document_text(self) -> None:
        text = "Sometimes I'm not good enought to be loved, she wrote."
        selector = compute_selector(text, "not good enough to be loved")

        assert selector is not None
        assert selector.exact == "not good enought to be loved"
        assert text[selector.start_offset : selector.end_offset] == selector.exact

    def test_not_found(self) -> None:
        assert compute_selector(FOX, "purple elephant") is None

    def test_empty_quote(self) -> None:
        assert compute_selector(FOX, "") is None
        assert compute_selector(FOX, "", start_hint=0) is None
        assert compute_selector("", "") is None


class TestNoContextThreshold:
    """Fuzzy anchoring without context requires a near-exact match."""

    def test_accepted_just_above_threshold(self) -> None:
        # 4 errors in 50 characters scores 0.96
        text = with_substitutions(PATTERN, [5, 15, 25, 35])
        selector = compute_selector(text, PATTERN)

        assert selector is not None
        assert selector.exact == text

    def test_rejected_just_below_threshold(self) -> None:
        # 6 errors in 50 characters scores 0.94
        text = with_substitutions(PATTERN, [3, 10, 17, 24, 31, 38])

        match = match_quote(text, PATTERN)
        assert match is not None
        assert match.score < NO_CONTEXT_THRESHOLD

        assert compute_selector(text, PATTERN) is None


class TestCodePointOffsets:
    """Offsets count code points, so astral characters occupy one position."""

    def test_offset_after_emoji(self) -> None:
        selector = compute_selector("😀 brown fox", "brown fox")
        assert selector is not None
        assert (selector.start_offset, selector.end_offset) == (2, 11)
        assert selector.prefix == "😀 "

    def test_emoji_inside_quote(self) -> None:
        # In UTF-16 code units this span would be [4, 9)
        selector = compute_selector("say 😀 hi", "😀 hi")
        assert selector is not None
        assert (selector.start_offset, selector.end_offset) == (4, 8)
        assert selector.exact == "😀 hi"

    def test_fuzzy_match_after_emoji(self) -> None:
        text = "😀😀 " + with_substitutions(PATTERN, [5])
        match = match_quote(text, PATTERN)
        assert match is not None
        assert (match.start, match.end) == (3, 53)


class TestMatchQuote:
    """Tests for match_quote."""

    def test_exact_match_scores_one(self) -> None:
        match = match_quote(FOX, "brown fox")

        assert match is not None
        assert (match.start, match.end, match.errors) == (10, 19, 0)
        assert match.score == 1.0

    def test_fuzzy_scenario(self) -> None:
        text = "I'm not good enought to be loved"
        match = match_quote(text, "not good enough to be loved")

        assert match is not None
        assert match.errors == 1
        assert match.score > MATCH_THRESHOLD
        assert text[match.start : match.end] == "not good enought to be loved"

    def test_empty_quote(self) -> None:
        assert match_quote(FOX, "") is None
        assert match_quote("", "") is None

    def test_no_candidates(self) -> None:
        assert match_quote("1234567890", "brown fox") is None

    def test_prefix_disambiguates(self) -> None:
        text = "A brown fox ran. Later a brown fox slept."
        match = match_quote(text, "brown fox", MatchContext(prefix="Later a "))

        assert match is not None
        assert match.start == 25

    def test_suffix_disambiguates(self) -> None:
        text = "A brown fox ran. Later a brown fox slept."
        match = match_quote(text, "brown fox", MatchContext(suffix=" slept."))

        assert match is not None
        assert match.start == 25

    def test_hint_disambiguates(self) -> None:
        text = "A brown fox ran. Later a brown fox slept."
        match = match_quote(text, "brown fox", MatchContext(hint=30))

        assert match is not None
        assert match.start == 25

    def test_equal_scores_keep_text_order(self) -> None:
        match = match_quote("abc abc", "abc")

        assert match is not None
        assert match.start == 0


class TestMatchThreshold:
    """Candidates scoring below 0.5 are rejected."""

    # The candidate spans the whole text, so neither the prefix nor the
    # suffix context has any text to match: score = (60 - errors) / 100
    CONTEXT = MatchContext(prefix="###", suffix="###")

    def test_accepted_at_051(self) -> None:
        text = with_substitutions(PATTERN, [2 + 5 * i for i in range(9)])
        match = match_quote(text, PATTERN, self.CONTEXT)

        assert match is not None
        assert match.errors == 9
        assert match.score == pytest.approx(0.51)

    def test_rejected_at_049(self) -> None:
        text = with_substitutions(PATTERN, [2 + 4 * i for i in range(11)])

        ranked = rank_candidates(text, PATTERN, self.CONTEXT)
        assert ranked[0].score == pytest.approx(0.49)

        assert match_quote(text, PATTERN, self.CONTEXT) is None


class TestScoreCandidate:
    """Tests for the weighted candidate score."""

    def test_perfect_candidate_without_context(self) -> None:
        candidate = StringMatch(start=10, end=19, errors=0)
        assert score_candidate(FOX, "brown fox", candidate) == 1.0

    def test_quote_errors_cost_half_the_score(self) -> None:
        # 9 errors on a 9 character quote zeroes the quote component
        candidate = StringMatch(start=10, end=19, errors=9)
        assert score_candidate(FOX, "brown fox", candidate) == pytest.approx(0.5)

    def test_prefix_weight(self) -> None:
        candidate = StringMatch(start=10, end=19, errors=0)
        context = MatchContext(prefix="@@@@@@@@@@")
        assert score_candidate(FOX, "brown fox", candidate, context) == pytest.approx(
            0.8
        )

    def test_suffix_weight(self) -> None:
        candidate = StringMatch(start=10, end=19, errors=0)
        context = MatchContext(suffix="@@@@@@")
        assert score_candidate(FOX, "brown fox", candidate, context) == pytest.approx(
            0.8
        )

    def test_position_weight(self) -> None:
        candidate = StringMatch(start=0, end=3, errors=0)
        context = MatchContext(hint=len(FOX))
        # Offset equal to the text length zeroes the position component
        assert score_candidate(FOX, "The", candidate, context) == pytest.approx(0.9)

    def test_empty_context_is_neutral(self) -> None:
        candidate = StringMatch(start=10, end=19, errors=0)
        context = MatchContext(prefix="", suffix="")
        assert score_candidate(FOX, "brown fox", candidate, context) == 1.0

    def test_prefix_at_document_start_is_truncated(self) -> None:
        candidate = StringMatch(start=0, end=3, errors=0)
        context = MatchContext(prefix="Once upon a time ")
        # Nothing precedes the candidate, so the prefix scores zero
        assert score_candidate(FOX, "The", candidate, context) == pytest.approx(0.8)

    def test_partial_prefix_match(self) -> None:
        candidate = StringMatch(start=10, end=19, errors=0)
        # Preceding slice "The quick " differs by one character
        context = MatchContext(prefix="The quack ")
        score = score_candidate(FOX, "brown fox", candidate, context)
        assert score == pytest.approx((50 + 20 * 0.9 + 20 + 10) / 100)
