"""Horizontal section partitioning."""

import pytest

from brotgen.scheduling import Section, available_cpus, default_section_count, horizontal_sections


def _assert_exact_partition(sections, height):
    covered = []
    for section in sections:
        assert section.start_y <= section.end_y
        covered.extend(section.rows())
    assert covered == list(range(height))


@pytest.mark.parametrize(
    "height, count",
    [(512, 1), (512, 16), (513, 16), (1000, 7), (600, 24), (10, 10), (5, 8), (1, 3), (8192, 64)],
)
def test_sections_partition_rows_exactly(height, count):
    sections = horizontal_sections(height, count)
    assert len(sections) == count
    assert [s.index for s in sections] == list(range(count))
    _assert_exact_partition(sections, height)


def test_sections_are_contiguous():
    sections = horizontal_sections(1000, 7)
    for prev, nxt in zip(sections, sections[1:]):
        assert prev.end_y == nxt.start_y


def test_all_but_last_use_ceiling_height():
    sections = horizontal_sections(1000, 7)
    assert [s.height for s in sections[:-1]] == [143] * 6
    assert sections[-1] == Section(6, 858, 1000)


def test_more_sections_than_rows_leaves_empty_sections():
    sections = horizontal_sections(3, 5)
    assert [s.height for s in sections] == [1, 1, 1, 0, 0]
    assert sections[-1].is_empty
    assert list(sections[-1].rows()) == []


@pytest.mark.parametrize("count", [0, -1])
def test_invalid_section_count(count):
    with pytest.raises(ValueError):
        horizontal_sections(512, count)


def test_default_section_count():
    assert default_section_count(4) == 8
    assert default_section_count(4, multiplier=3) == 12
    assert default_section_count(1) == 2
    assert default_section_count(4, multiplier=0) == 1


def test_available_cpus(monkeypatch):
    monkeypatch.setattr("brotgen.scheduling.os.cpu_count", lambda: 6)
    assert available_cpus() == 6
    monkeypatch.setattr("brotgen.scheduling.os.cpu_count", lambda: None)
    assert available_cpus() == 1
