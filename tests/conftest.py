import pytest

from hmm_tagger.services.tagger_model import TaggerModel

TOY_CORPUS = [["dog/N", "barks/V"], ["cat/N", "meows/V"]]

SMALL_CORPUS = [
    ["the/D", "dog/N", "barks/V"],
    ["a/D", "cat/N", "meows/V"],
    ["the/D", "cat/N", "sleeps/V"],
    ["dogs/N", "bark/V"],
    ["the/D", "old/J", "dog/N", "sleeps/V"],
    ["a/D", "dog/N", "runs/V", "fast/R"],
    ["cats/N", "run/V"],
    ["the/D", "big/J", "cat/N", "runs/V"],
    ["a/D", "small/J", "dog/N", "barks/V", "loudly/R"],
    ["birds/N", "sing/V"],
]


@pytest.fixture
def toy_model():
    return TaggerModel().train(TOY_CORPUS)


@pytest.fixture
def small_model():
    return TaggerModel().train(SMALL_CORPUS)
