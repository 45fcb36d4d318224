import pytest

from geo_atlas.gedcom_parser import GedcomLine, GedcomParser, ParseContext, SkippedLine, parse_gedcom, tokenize_line
from geo_atlas.life_event import EventType


def test_tokenize_line_with_xref():
    line = tokenize_line(3, "0 @I1@ INDI")
    assert isinstance(line, GedcomLine)
    assert line.level == 0
    assert line.xref == "@I1@"
    assert line.tag == "INDI"
    assert line.value == ""


def test_tokenize_line_keeps_value_spaces():
    line = tokenize_line(1, "  2 PLAC  Dublin, Ireland  ")
    assert line.level == 2
    assert line.xref is None
    assert line.tag == "PLAC"
    assert line.value == "Dublin, Ireland"


@pytest.mark.parametrize("raw,reason", [
    ("X NAME John", "non-numeric level"),
    ("-1 NAME John", "invalid level"),
    ("1", "missing tag"),
    ("0 @I9@", "missing tag"),
])
def test_tokenize_line_malformed(raw, reason):
    skipped = tokenize_line(7, raw)
    assert isinstance(skipped, SkippedLine)
    assert skipped.line_number == 7
    assert skipped.reason == reason


@pytest.mark.parametrize("count", [0, 1, 3, 10])
def test_individual_count_matches_indi_blocks(count):
    text = "0 HEAD\n" + "".join(f"0 @I{i}@ INDI\n1 NAME Person {i}\n" for i in range(count)) + "0 TRLR\n"
    parsed = parse_gedcom(text)
    assert len(parsed.individuals) == count
    assert [ind.xref_id for ind in parsed.individuals] == [f"@I{i}@" for i in range(count)]


def test_name_slashes_removed():
    parsed = parse_gedcom("0 @I1@ INDI\n1 NAME John /Smith/\n")
    assert parsed.individuals[0].name == "John Smith"


def test_name_inner_spacing_kept():
    parsed = parse_gedcom("0 @I1@ INDI\n1 NAME John  Henry /Smith/\n")
    assert parsed.individuals[0].name == "John  Henry Smith"


def test_birth_and_death_fields(sample_gedcom):
    parsed = parse_gedcom(sample_gedcom)
    john = parsed.individuals[0]
    assert john.birth_date is None
    assert john.birth_place == "Boston"
    assert john.death_date is None
    assert john.death_place == "Chicago"
    assert john.notes == "Worked on the railways."
    assert [e.event_type for e in john.events] == [EventType.BIRTH, EventType.DEATH]


def test_event_closes_at_first_date_or_place():
    parsed = parse_gedcom("0 @I1@ INDI\n1 NAME A\n1 BIRT\n2 DATE 1900\n2 PLAC Boston\n")
    ind = parsed.individuals[0]
    assert ind.birth_date == "1900"
    assert ind.birth_place is None
    assert len(ind.events) == 1
    assert [(e.date, e.place) for e in parsed.events] == [("1900", None)]


def test_place_first_drops_following_date(sample_gedcom):
    john = parse_gedcom(sample_gedcom).individuals[0]
    assert len(john.events) == 2
    birth = john.events[0]
    assert birth.place == "Boston"
    assert birth.date is None


def test_flat_event_list(sample_gedcom):
    parsed = parse_gedcom(sample_gedcom)
    assert [(e.event_type, e.place) for e in parsed.events] == [
        (EventType.BIRTH, "Boston"),
        (EventType.DEATH, "Chicago"),
        (EventType.BIRTH, "Atlantis"),
        (EventType.DEATH, None),
        (EventType.MARRIAGE, "New York"),
    ]


def test_family_structure(sample_gedcom):
    parsed = parse_gedcom(sample_gedcom)
    assert len(parsed.families) == 1
    family = parsed.families[0]
    assert family.xref_id == "@F1@"
    assert family.husband == "@I1@"
    assert family.wife == "@I2@"
    assert family.children == ("@I3@",)
    assert family.marriage_date is None
    assert family.marriage_place == "New York"
    assert family.partners() == ["@I1@", "@I2@"]


def test_later_birth_overwrites_top_level_fields():
    text = "0 @I1@ INDI\n1 NAME A\n1 BIRT\n2 PLAC First\n1 BIRT\n2 PLAC Second\n"
    ind = parse_gedcom(text).individuals[0]
    assert ind.birth_place == "Second"
    assert len(ind.events) == 2


def test_residence_event_not_copied_to_fields():
    text = "0 @I1@ INDI\n1 NAME A\n1 RESI\n2 PLAC Boston\n"
    ind = parse_gedcom(text).individuals[0]
    assert ind.birth_place is None
    assert ind.events[0].event_type == EventType.RESIDENCE


def test_event_without_date_or_place_not_attached():
    ind = parse_gedcom("0 @I1@ INDI\n1 NAME A\n1 BIRT\n1 SEX M\n").individuals[0]
    assert ind.events == ()


def test_pending_event_survives_other_facts():
    ind = parse_gedcom("0 @I1@ INDI\n1 NAME A\n1 BIRT\n1 OCCU Smith\n2 DATE 1900\n").individuals[0]
    assert [e.event_type for e in ind.events] == [EventType.BIRTH]
    assert ind.birth_date == "1900"


def test_pending_event_carries_into_next_record():
    text = "0 @I1@ INDI\n1 NAME A\n1 BIRT\n0 @I2@ INDI\n1 NAME B\n2 PLAC Boston\n"
    first, second = parse_gedcom(text).individuals
    assert first.events == ()
    assert second.birth_place == "Boston"


def test_detail_without_open_event_ignored():
    parsed = parse_gedcom("0 @I1@ INDI\n1 NAME A\n2 DATE 1900\n1 BIRT\n2 PLAC Boston\n2 PLAC Salem\n")
    ind = parsed.individuals[0]
    assert ind.birth_place == "Boston"
    assert len(parsed.events) == 1


def test_malformed_lines_skipped_not_raised():
    text = "0 @I1@ INDI\nbad line here\n1 NAME A\n\n1\n0 TRLR\n"
    parsed = parse_gedcom(text)
    assert len(parsed.individuals) == 1
    assert parsed.individuals[0].name == "A"
    assert [(s.line_number, s.reason) for s in parsed.skipped] == [
        (2, "non-numeric level"),
        (5, "missing tag"),
    ]


def test_record_without_xref_is_skipped():
    parsed = parse_gedcom("0 INDI\n1 NAME Anonymous\n0 @I2@ INDI\n1 NAME Named\n")
    assert [ind.name for ind in parsed.individuals] == ["Named"]
    assert parsed.skipped[0].reason == "record without identifier"
    assert parsed.skipped[0].line_number == 1


def test_other_level_zero_closes_context():
    parsed = parse_gedcom("0 @I1@ INDI\n1 NAME A\n0 @N1@ NOTE\n1 NAME Not a person\n")
    assert len(parsed.individuals) == 1
    assert parsed.individuals[0].name == "A"


def test_windows_line_endings():
    parsed = parse_gedcom("0 @I1@ INDI\r\n1 NAME John /Smith/\r\n1 BIRT\r\n2 PLAC Boston\r\n")
    assert parsed.individuals[0].name == "John Smith"
    assert parsed.individuals[0].birth_place == "Boston"


def test_parser_reusable():
    parser = GedcomParser()
    first = parser.parse("0 @I1@ INDI\n1 NAME A\n")
    second = parser.parse("0 @I2@ INDI\n1 NAME B\n")
    assert [i.name for i in first.individuals] == ["A"]
    assert [i.name for i in second.individuals] == ["B"]
    assert parser.context is ParseContext.NONE
