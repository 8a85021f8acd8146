from src.attendance_dashboard.attendance_dashboard.attendance.reconciler import reconcile


def test_partition_preserves_roster_order():
    roster = ["d@x.com", "a@x.com", "c@x.com", "b@x.com"]
    result = reconcile(roster, {"a@x.com", "b@x.com"})

    assert list(result.present) == ["a@x.com", "b@x.com"]
    assert list(result.absent) == ["d@x.com", "c@x.com"]


def test_email_match_ignores_case_and_whitespace():
    result = reconcile(["A@X.com "], {"a@x.com"})
    assert list(result.present) == ["a@x.com"]
    assert list(result.absent) == []


def test_duplicates_are_kept_positionally():
    roster = ["a@x.com", "b@x.com", "A@x.com", "b@x.com"]
    result = reconcile(roster, {"a@x.com"})

    assert list(result.present) == ["a@x.com", "a@x.com"]
    assert list(result.absent) == ["b@x.com", "b@x.com"]
    assert len(result.present) + len(result.absent) == len(roster)


def test_every_email_lands_in_exactly_one_side():
    roster = [f"s{i}@x.com" for i in range(20)]
    present_set = {f"s{i}@x.com" for i in range(0, 20, 3)}
    result = reconcile(roster, present_set)

    assert set(result.present).isdisjoint(result.absent)
    assert sorted(list(result.present) + list(result.absent)) == sorted(roster)


def test_empty_roster():
    result = reconcile([], {"a@x.com"})
    assert (list(result.present), list(result.absent)) == ([], [])
