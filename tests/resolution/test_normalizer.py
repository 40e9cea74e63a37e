"""Tests for text folding and accent-tolerant regex builders."""

import pytest

from campus_directory.resolution.normalizer import exact_regex, like_regex, normalize


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Salón 126", "salon 126"),
        ("  Laboratorio   de\tTelemática  II ", "laboratorio de telematica ii"),
        ("ÑANDÚ Çedilla", "nandu cedilla"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize(raw, expected):
    assert normalize(raw) == expected


@pytest.mark.parametrize(
    "raw",
    ["Sala de Cómputo 5", "  SD-II  ", "İstanbul", "ÀÉÎÕÜ ñ", "tele\n\n2", "", "Ωμέγα"],
)
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once


def test_like_regex_matches_accent_variants_as_substring():
    rx = like_regex("telematica")
    assert rx.search("Laboratorio de Telemática II")
    assert rx.search("TELEMÁTICA")
    assert not rx.search("Telecomunicaciones")


def test_like_regex_expands_accented_literal():
    rx = like_regex("Salón")
    assert rx.search("salon 201")
    assert rx.search("SALÓN 126")


def test_like_regex_escapes_metacharacters():
    rx = like_regex("p.t.t (b)")
    assert rx.search("lab P.T.T (B)")
    assert not rx.search("pxtxt (b)")


def test_exact_regex_is_anchored_and_whitespace_tolerant():
    rx = exact_regex("Salón 126")
    assert rx.search("Salon 126")
    assert rx.search("  salón    126 ")
    assert not rx.search("Salón 1260")
    assert not rx.search("Edificio Salón 126")


def test_exact_regex_ignores_surrounding_whitespace_of_literal():
    rx = exact_regex("  Aula \t L320\n")
    assert rx.search("Aula L320")
    assert rx.search(" aula   l320 ")
    assert not rx.search("AulaL320")
    assert exact_regex("   ") is None


@pytest.mark.parametrize("builder", [like_regex, exact_regex])
def test_builders_return_none_for_empty_input(builder):
    assert builder("") is None
    assert builder(None) is None
