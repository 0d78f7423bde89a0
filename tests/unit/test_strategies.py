"""
Unit tests for urlalias.manager.strategies.
"""

import re
from concurrent.futures import ThreadPoolExecutor

import pytest

from urlalias.manager.strategies import RandomStrategy, new_random_string

BASE62_PATTERN = re.compile(r"^[0-9a-zA-Z]+$")


@pytest.mark.parametrize("length", [1, 6, 32])
def test_random_strategy_exact_length_and_charset(length):
    r = RandomStrategy()
    samples = [r.generate(length) for _ in range(50)]
    assert all(len(x) == length and BASE62_PATTERN.match(x) for x in samples)


def test_random_strategy_diversity():
    r = RandomStrategy()
    samples = [r.generate(6) for _ in range(200)]
    assert len(set(samples)) > 190


def test_random_strategy_uses_whole_alphabet():
    seen = set("".join(RandomStrategy().generate(64) for _ in range(200)))
    assert any(c.isupper() for c in seen)
    assert any(c.islower() for c in seen)
    assert any(c.isdigit() for c in seen)


def test_random_strategy_rejects_non_positive_length():
    with pytest.raises(ValueError):
        RandomStrategy().generate(0)


def test_new_random_string():
    assert BASE62_PATTERN.match(new_random_string(10))
    assert len(new_random_string(10)) == 10


def test_random_strategy_concurrent_calls():
    r = RandomStrategy()
    with ThreadPoolExecutor(max_workers=8) as pool:
        samples = list(pool.map(lambda _: r.generate(8), range(400)))
    assert all(len(x) == 8 and BASE62_PATTERN.match(x) for x in samples)
    assert len(set(samples)) == 400
