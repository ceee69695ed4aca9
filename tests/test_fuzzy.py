"""Tests for fuzzy scoring and ranking."""

from __future__ import annotations

import pytest

from repo_picker.fuzzy import DEFAULT_THRESHOLD, SUBSTRING_TIER, fuzzy_score, rank
from repo_picker.types import Item


# ── fuzzy_score ───────────────────────────────────────────────────────────


def test_empty_query_scores_zero():
    assert fuzzy_score("", "anything") == 0


def test_out_of_order_characters_do_not_match():
    assert fuzzy_score("ba", "ab") is None


def test_query_longer_than_text_does_not_match():
    assert fuzzy_score("abcd", "abc") is None


def test_prefix_substring_score():
    # g: 16 + doubled start bonus 16, a: 16 + consecutive 4
    assert fuzzy_score("ga", "gamma") == SUBSTRING_TIER + 52


def test_substring_outranks_sparse_match_of_equal_length():
    contiguous = fuzzy_score("abc", "xabcx")
    sparse = fuzzy_score("abc", "axbxc")
    assert contiguous is not None and sparse is not None
    assert contiguous > sparse


def test_word_boundary_scores_higher():
    assert fuzzy_score("fb", "foo-bar") > fuzzy_score("fb", "fooxbar")


def test_camel_case_hump_counts_as_boundary():
    assert fuzzy_score("fb", "fooBar") > fuzzy_score("fb", "foobar")


def test_best_substring_occurrence_wins():
    # "ab" after a separator beats the same letters mid-word
    assert fuzzy_score("ab", "xab-ab") > fuzzy_score("ab", "xabxab")


def test_smart_case_lowercase_query_ignores_case():
    assert fuzzy_score("repo", "MyREPO") is not None


def test_smart_case_uppercase_query_is_case_sensitive():
    assert fuzzy_score("Repo", "myrepo") is None
    assert fuzzy_score("Repo", "myRepo") is not None


def test_long_gaps_can_push_score_below_zero():
    assert fuzzy_score("ab", "a" + "x" * 50 + "b") == -4


@pytest.mark.parametrize("prefix,text", [
    ("z", "alpha"),
    ("ab", "bba"),
    ("qq", "quick"),
])
def test_extending_a_non_matching_query_never_matches(prefix, text):
    assert fuzzy_score(prefix, text) is None
    for extra in "abcxyz":
        assert fuzzy_score(prefix + extra, text) is None


# ── rank ──────────────────────────────────────────────────────────────────


def test_empty_query_returns_items_in_original_order(make_items):
    items = make_items("gamma", "alpha", "beta")
    assert rank("", items) == tuple(items)


def test_rank_orders_by_descending_score(make_items):
    items = make_items("xxgxxa", "gamma", "ga-ma")
    ranked = rank("ga", items)
    assert [item.name for item in ranked] == ["gamma", "ga-ma", "xxgxxa"]


def test_rank_excludes_non_matching(make_items):
    items = make_items("alpha", "beta", "gamma")
    assert [item.name for item in rank("ga", items)] == ["gamma"]


def test_rank_excludes_below_threshold(make_items):
    far = "a" + "x" * 50 + "b"
    items = make_items(far, "ab")
    ranked = rank("ab", items)
    assert [item.name for item in ranked] == ["ab"]


def test_rank_threshold_is_configurable(make_items):
    items = make_items("gamma", "xgxxxxa")
    assert len(rank("ga", items, threshold=SUBSTRING_TIER)) == 1
    assert len(rank("ga", items, threshold=-1000)) == 2


def test_ties_keep_discovery_order():
    first = Item(name="alpha", path="/one/alpha")
    second = Item(name="alpha", path="/two/alpha")
    assert rank("alp", [first, second]) == (first, second)
    assert rank("alp", [second, first]) == (second, first)


def test_rank_is_deterministic(make_items):
    items = make_items("repo-a", "repo-b", "other", "report", "rope")
    assert rank("rp", items) == rank("rp", items)


def test_rank_does_not_mutate_input(make_items):
    items = make_items("beta", "alpha")
    snapshot = list(items)
    rank("a", items)
    assert items == snapshot


def test_rank_accepts_custom_scorer(make_items):
    items = make_items("bb", "a", "ccc")

    def by_length(query, text):
        return len(text)

    assert [item.name for item in rank("x", items, scorer=by_length)] == ["ccc", "bb", "a"]


def test_custom_scorer_none_excludes(make_items):
    items = make_items("keep", "drop")
    ranked = rank("x", items, scorer=lambda q, t: None if t == "drop" else 5)
    assert [item.name for item in ranked] == ["keep"]


def test_default_threshold():
    assert DEFAULT_THRESHOLD == 1
