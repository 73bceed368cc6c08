from __future__ import annotations

from komorph.nlp.adapter import Morpheme
from komorph.nlp.morphemes import parse_mecab_line, parse_mecab_output
from komorph.services.extraction import extract_keywords, extract_noun_phrases


def test_output_drops_end_of_sentence_and_blank_lines() -> None:
    output = "사과\tNN,*,*,*,*\n오렌지\tNN,*,*,*,*\nEOS\n\n"

    morphemes = parse_mecab_output(output)

    assert [morpheme.surface for morpheme in morphemes] == ["사과", "오렌지"]
    assert [morpheme.tag for morpheme in morphemes] == ["NN", "NN"]
    assert extract_noun_phrases(morphemes) == ["사과", "사과 오렌지", "오렌지"]


def test_output_as_returned_by_mecab_keeps_every_data_line() -> None:
    output = "서울\tNN,*,T,서울,*,*,*,*\n에\tJKB,*,F,에,*,*,*,*\nEOS\n"

    morphemes = parse_mecab_output(output)

    assert morphemes == [
        Morpheme("서울", "NN", ("*", "T", "서울", "*", "*", "*", "*")),
        Morpheme("에", "JKB", ("*", "F", "에", "*", "*", "*", "*")),
    ]


def test_empty_output_yields_no_morphemes() -> None:
    assert parse_mecab_output("") == []
    assert parse_mecab_output("EOS\n") == []


def test_short_line_leaves_missing_feature_slots_absent() -> None:
    morpheme = parse_mecab_line("사과\tNN,*")

    assert morpheme.tag == "NN"
    assert morpheme.features == ("*",)
    assert morpheme.feature(0) == "*"
    assert morpheme.feature(2) is None
    assert morpheme.is_compound is False


def test_line_without_tab_has_empty_tag() -> None:
    morpheme = parse_mecab_line("broken")

    assert morpheme == Morpheme("broken", "", ())


def test_surface_containing_comma_is_kept_intact() -> None:
    morpheme = parse_mecab_line(",\tSC,*,*,*,*,*")

    assert morpheme.surface == ","
    assert morpheme.tag == "SC"


def test_compound_flag_is_the_fifth_field_of_the_record() -> None:
    assert parse_mecab_line("대학교\tNN,*,*,Compound,*").is_compound is True
    assert parse_mecab_line("대학교\tNN,*,*,*,Compound").is_compound is False
    assert parse_mecab_line("대학교\tNN,*,*,*,*").is_compound is False


def test_keywords_from_plain_noun_records() -> None:
    output = "사과\tNN,*,*,*,*\n오렌지\tNN,*,*,*,*\n.\tSF,*,*,*,*\nEOS\n\n"

    assert extract_keywords(parse_mecab_output(output)) == ["사과 오렌지"]
