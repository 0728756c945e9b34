import pytest

from hmm_tagger.errors import ParseError
from hmm_tagger.models.models import START_TAG
from hmm_tagger.services.indexer import index_corpus
from hmm_tagger.services.probability import build_probability_tables

from conftest import SMALL_CORPUS, TOY_CORPUS


def test_index_toy_corpus():
    freq = index_corpus(TOY_CORPUS)

    assert dict(freq.tag_freq) == {"N": 2, "V": 2, START_TAG: 2}
    assert dict(freq.word_freq) == {"dog": 1, "barks": 1, "cat": 1, "meows": 1}
    assert freq.word_tag_freq[("dog", "N")] == 1
    assert dict(freq.tag_bigram_freq) == {(START_TAG, "N"): 2, ("N", "V"): 2}
    assert freq.vocabulary == ("barks", "cat", "dog", "meows")
    assert freq.tag_set == (START_TAG, "N", "V")
    assert freq.candidate_tags == ("N", "V")


def test_index_accepts_token_pairs():
    freq = index_corpus([[("dog", "N"), ("barks", "V")]])
    assert freq.count_word_tag("barks", "V") == 1
    assert freq.count_tag_bigram("N", "V") == 1


def test_index_empty_corpus():
    freq = index_corpus([])
    assert not freq.word_freq
    assert not freq.tag_freq
    assert freq.vocabulary == ()
    assert freq.tag_set == ()


def test_index_splits_on_last_separator():
    freq = index_corpus([["1/2/CD", "and/CC"]])
    assert freq.count_word_tag("1/2", "CD") == 1


def test_index_rejects_malformed_token():
    with pytest.raises(ParseError):
        index_corpus([["dog/N", "barks"]])


def test_tables_are_read_only():
    freq = index_corpus(TOY_CORPUS)
    with pytest.raises(TypeError):
        freq.word_freq["dog"] = 5


def test_toy_probabilities():
    tables = build_probability_tables(index_corpus(TOY_CORPUS))

    assert tables.transition[(START_TAG, "N")] == 1.0
    assert tables.transition[("N", "V")] == 1.0
    assert ("V", "N") not in tables.transition
    assert tables.emission[("dog", "N")] == 0.5
    assert ("dog", "V") not in tables.emission


def test_probabilities_in_range_and_normalised():
    freq = index_corpus(SMALL_CORPUS)
    tables = build_probability_tables(freq)

    for value in list(tables.transition.values()) + list(tables.emission.values()):
        assert 0 < value <= 1

    for prev_tag in freq.tag_set:
        mass = sum(p for (prev, _), p in tables.transition.items() if prev == prev_tag)
        # V and R end sentences, so their outgoing mass is below one
        assert mass <= 1 + 1e-9

    for tag in freq.candidate_tags:
        mass = sum(p for (_, t), p in tables.emission.items() if t == tag)
        assert mass == pytest.approx(1.0)
