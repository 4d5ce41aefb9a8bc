from hypothesis import given, strategies as st

from gitblame.display import lines_to_ranges

line_sets = st.sets(st.integers(min_value=1, max_value=500), max_size=60)


@given(lines=line_sets)
def test_ranges_cover_exactly_the_input(lines: set[int]) -> None:
    ranges = lines_to_ranges(lines)

    covered = {n for start, end in ranges for n in range(start, end + 1)}
    assert covered == lines


@given(lines=line_sets)
def test_ranges_are_sorted_and_separated(lines: set[int]) -> None:
    ranges = lines_to_ranges(lines)

    for (_, previous_end), (next_start, _) in zip(ranges, ranges[1:], strict=False):
        assert next_start > previous_end + 1
    for start, end in ranges:
        assert start <= end
