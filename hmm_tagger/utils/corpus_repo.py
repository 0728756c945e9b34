import logging
import re
from typing import Iterable, List, Sequence

from hmm_tagger.errors import ParseError
from hmm_tagger.models.models import DEFAULT_SEPARATOR, Token

logger = logging.getLogger(__name__)

_TOKEN_SPLIT = re.compile(r"\s+")


def split_token(token: str, separator: str = DEFAULT_SEPARATOR) -> Token:
    """Split "word<SEP>tag" on the last separator, so words may contain it"""
    word, sep, tag = token.rpartition(separator)
    if not sep or not word or not tag:
        raise ParseError(f"Malformed token {token!r}: expected word{separator}tag")
    return word, tag


def join_token(word: str, tag: str, separator: str = DEFAULT_SEPARATOR) -> str:
    return f"{word}{separator}{tag}"


def parse_corpus(text: str) -> List[List[str]]:
    """One sentence per non-blank line, tokens split on whitespace"""
    return [_TOKEN_SPLIT.split(line.strip()) for line in text.splitlines() if line.strip()]


def parse_tagged_corpus(text: str, separator: str = DEFAULT_SEPARATOR) -> List[List[Token]]:
    corpus = []
    for line_no, sentence in enumerate(parse_corpus(text), start=1):
        try:
            corpus.append([split_token(token, separator) for token in sentence])
        except ParseError as e:
            raise ParseError(f"Sentence {line_no}: {e}") from e
    return corpus


def strip_tags(corpus: Iterable[Sequence[Token]]) -> List[List[str]]:
    return [[word for word, _ in sentence] for sentence in corpus]


def render_tagged(corpus: Iterable[Sequence[Token]], separator: str = DEFAULT_SEPARATOR) -> str:
    return "\n".join(
        " ".join(join_token(word, tag, separator) for word, tag in sentence)
        for sentence in corpus
    )


def read_text(file_path: str) -> str:
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        logger.error(f"Corpus file not found: {file_path}")
        raise


def read_corpus(file_path: str) -> List[List[str]]:
    """Read an untagged corpus as lists of words"""
    corpus = parse_corpus(read_text(file_path))
    logger.info(f"Read {len(corpus)} sentences from {file_path}")
    return corpus


def read_tagged_corpus(file_path: str, separator: str = DEFAULT_SEPARATOR) -> List[List[Token]]:
    try:
        corpus = parse_tagged_corpus(read_text(file_path), separator)
    except ParseError:
        logger.error(f"Invalid tagged corpus: {file_path}")
        raise
    logger.info(f"Read {len(corpus)} tagged sentences from {file_path}")
    return corpus


def write_text(file_path: str, text: str) -> None:
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(text)
        if text and not text.endswith("\n"):
            f.write("\n")
