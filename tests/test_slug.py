from __future__ import annotations

import re

import pytest

from mapsync.slug import slugify


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("1v1", "1v1"),
        ("CERTIFIED", "certified"),
        ("Comet Catcher Redux", "comet-catcher-redux"),
        ("  Tropical -- Isles!! ", "tropical-isles"),
        ("Map_v2.1 (final)", "map-v2-1-final"),
        ("---", ""),
        ("Åland Ice", "land-ice"),
    ],
)
def test_slugify_examples(name: str, expected: str) -> None:
    assert slugify(name) == expected


@pytest.mark.parametrize(
    "name",
    ["Comet Catcher Redux", "  leading and trailing  ", "MiXeD_CaSe.name", "a--b__c", "ÜBER map 99", "", "-x-"],
)
def test_slugify_is_idempotent_and_url_safe(name: str) -> None:
    slug = slugify(name)

    assert slugify(slug) == slug
    assert re.fullmatch(r"[a-z0-9-]*", slug)
    assert not slug.startswith("-")
    assert not slug.endswith("-")
    assert "--" not in slug
