"""
Tests for autocomplete suggestions
"""
from search_suggestions import SearchSuggester


def test_empty_query_has_no_suggestions():
    assert SearchSuggester().suggest("") == []


def test_typo_gets_did_you_mean():
    suggestions = SearchSuggester().suggest("sbi tceh")
    assert suggestions[0].text == "sbi tech"
    assert suggestions[0].did_you_mean is True


def test_prefix_match_is_not_did_you_mean():
    suggestions = SearchSuggester().suggest("sbi")
    assert [s.text for s in suggestions] == ["sbi tech"]
    assert suggestions[0].did_you_mean is False


def test_exact_example_is_not_did_you_mean():
    suggester = SearchSuggester()
    assert suggester.is_did_you_mean("sbi tech", "sbi tech") is False


def test_long_examples_are_never_did_you_mean():
    suggester = SearchSuggester()
    assert suggester.is_did_you_mean("kotak emerging fund", "kotak emerging funds") is False


def test_question_input_gets_question_examples():
    suggestions = SearchSuggester().suggest("What's the")
    assert len(suggestions) == 4
    assert all(s.text.startswith("What's the") for s in suggestions)
    assert not any(s.did_you_mean for s in suggestions)


def test_limit_and_custom_examples():
    suggester = SearchSuggester(search_examples=["alpha", "alpha two", "alpha three"])
    assert [s.text for s in suggester.suggest("alpha", limit=2)] == ["alpha", "alpha two"]


def test_suggestion_serializes_camel_case():
    suggestion = SearchSuggester().suggest("sbi tceh")[0]
    assert suggestion.model_dump(by_alias=True) == {"text": "sbi tech", "didYouMean": True}
