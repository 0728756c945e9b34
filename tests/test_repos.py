import json

import pytest

from hmm_tagger.errors import ModelFormatError, ParseError
from hmm_tagger.models.models import Technique
from hmm_tagger.utils import corpus_repo
from hmm_tagger.utils.model_repo import (
    SCHEMA_VERSION,
    decode_model,
    encode_model,
    load_model,
    save_model,
)

from conftest import SMALL_CORPUS


@pytest.mark.parametrize("token, expected", [
    ("dog/N", ("dog", "N")),
    ("1/2/CD", ("1/2", "CD")),
    ("//SYM", ("/", "SYM")),
])
def test_split_token(token, expected):
    assert corpus_repo.split_token(token) == expected


@pytest.mark.parametrize("token", ["dog", "/N", "dog/", ""])
def test_split_token_rejects_malformed(token):
    with pytest.raises(ParseError):
        corpus_repo.split_token(token)


def test_split_token_custom_separator():
    assert corpus_repo.split_token("dog|N", "|") == ("dog", "N")


def test_parse_corpus_skips_blank_lines():
    text = "the dog  barks\n\n  a cat meows \n"
    assert corpus_repo.parse_corpus(text) == [["the", "dog", "barks"], ["a", "cat", "meows"]]


def test_parse_tagged_corpus_reports_line():
    with pytest.raises(ParseError, match="Sentence 2"):
        corpus_repo.parse_tagged_corpus("dog/N barks/V\ncat meows/V")


def test_render_tagged():
    tagged = [[("dog", "N"), ("barks", "V")], [("cat", "N")]]
    assert corpus_repo.render_tagged(tagged) == "dog/N barks/V\ncat/N"


def test_read_and_write_corpus(tmp_path):
    path = tmp_path / "corpus.txt"
    corpus_repo.write_text(str(path), "dog/N barks/V\ncat/N meows/V")

    assert path.read_text(encoding="utf-8").endswith("\n")
    assert corpus_repo.read_tagged_corpus(str(path)) == [
        [("dog", "N"), ("barks", "V")],
        [("cat", "N"), ("meows", "V")],
    ]
    assert corpus_repo.read_corpus(str(path))[0] == ["dog/N", "barks/V"]


def test_read_missing_corpus(tmp_path):
    with pytest.raises(FileNotFoundError):
        corpus_repo.read_corpus(str(tmp_path / "missing.txt"))


def test_model_round_trip(small_model):
    small_model.best_technique = Technique.WITTEN_BELL
    restored = decode_model(encode_model(small_model))

    assert restored.best_technique == Technique.WITTEN_BELL
    assert restored.separator == small_model.separator
    assert restored.freq == small_model.freq
    assert dict(restored.tables.transition) == dict(small_model.tables.transition)
    assert dict(restored.tables.emission) == dict(small_model.tables.emission)
    assert restored.freq.tag_set == small_model.freq.tag_set

    sentences = [["the", "dog", "runs"], ["a", "zebra", "sings"]]
    assert restored.tag(sentences) == small_model.tag(sentences)


def test_model_file_round_trip(tmp_path, toy_model):
    path = str(tmp_path / "model.json")
    save_model(toy_model, path)
    assert load_model(path).tag([["cat", "barks"]]) == [[("cat", "N"), ("barks", "V")]]


def test_decode_rejects_other_version(toy_model):
    data = json.loads(encode_model(toy_model))
    data["version"] = SCHEMA_VERSION + 1
    with pytest.raises(ModelFormatError, match="version"):
        decode_model(json.dumps(data))


@pytest.mark.parametrize("data", ["not json", "{}", '{"version": 1}'])
def test_decode_rejects_malformed(data):
    with pytest.raises(ModelFormatError):
        decode_model(data)


def test_decode_rejects_inconsistent_tag_set(toy_model):
    data = json.loads(encode_model(toy_model))
    data["tag_set"] = ["N", "V"]
    with pytest.raises(ModelFormatError):
        decode_model(json.dumps(data))
