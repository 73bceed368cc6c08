from __future__ import annotations

from komorph.nlp.adapter import Morpheme


def parse_mecab_line(line: str) -> Morpheme:
    surface, _, raw_features = line.partition("\t")
    fields = raw_features.split(",") if raw_features else []
    tag = fields[0] if fields else ""
    return Morpheme(surface=surface, tag=tag, features=tuple(fields[1:]))


def parse_mecab_output(output: str) -> list[Morpheme]:
    """Turn MeCab's tabular output into morphemes.

    Each data line is ``surface<TAB>tag,feature,...``. The output closes with
    an end-of-sentence line and a trailing newline; the trailing blank lines
    and the end-of-sentence line are not data.
    """
    lines = output.split("\n")
    while lines and not lines[-1]:
        lines.pop()
    return [parse_mecab_line(line) for line in lines[:-1]]
