"""Tests for leaderboard aggregation."""

import random

from streamboard.models import Record
from streamboard.services import compute_leaderboard


def rec(player, score, play_time=0):
    return Record(player=player, score=score, playTime=play_time)


def test_best_score_per_player_ranked():
    leaderboard = compute_leaderboard([
        rec("alice", 50, 10),
        rec("bob", 80, 20),
        rec("alice", 30, 5),
    ])

    assert [(e.rank, e.player, e.score, e.playTime) for e in leaderboard] == [
        (1, "bob", "80", "20"),
        (2, "alice", "50", "10"),
    ]


def test_empty_input():
    assert compute_leaderboard([]) == []


def test_records_without_player_are_dropped():
    leaderboard = compute_leaderboard([
        rec("", 1000),
        rec("alice", 5),
        Record(score=999),
    ])

    assert [e.player for e in leaderboard] == ["alice"]
    assert leaderboard[0].rank == 1


def test_scores_compare_as_integers():
    # "9" > "10" as strings
    leaderboard = compute_leaderboard([rec("a", 9), rec("b", 10)])
    assert [e.player for e in leaderboard] == ["b", "a"]


def test_large_scores_compare_without_precision_loss():
    big = 123456789012345678901234
    leaderboard = compute_leaderboard([rec("a", big), rec("b", big + 1), rec("a", big - 1)])

    assert [(e.player, e.score) for e in leaderboard] == [
        ("b", "123456789012345678901235"),
        ("a", "123456789012345678901234"),
    ]


def test_equal_score_keeps_first_record():
    leaderboard = compute_leaderboard([rec("alice", 50, 10), rec("alice", 50, 99)])
    assert leaderboard[0].playTime == "10"


def test_equal_best_scores_keep_first_seen_player_order():
    leaderboard = compute_leaderboard([rec("carol", 10), rec("alice", 70), rec("bob", 70)])
    assert [e.player for e in leaderboard] == ["alice", "bob", "carol"]


def test_properties_hold_for_shuffled_input():
    rng = random.Random(7)
    players = [f"p{i}" for i in range(20)]
    records = [rec(rng.choice(players + [""]), rng.randrange(10**30), rng.randrange(600)) for _ in range(300)]

    leaderboard = compute_leaderboard(records)

    scores = [int(e.score) for e in leaderboard]
    assert scores == sorted(scores, reverse=True)
    assert [e.rank for e in leaderboard] == list(range(1, len(leaderboard) + 1))
    assert len({e.player for e in leaderboard}) == len(leaderboard)
    assert "" not in {e.player for e in leaderboard}

    best = {}
    for r in records:
        if r.player:
            best[r.player] = max(best.get(r.player, 0), r.score)
    assert {e.player: int(e.score) for e in leaderboard} == best

    shuffled = records[:]
    rng.shuffle(shuffled)
    # Scores this wide are distinct, so order is independent of input order
    assert [(e.player, e.score) for e in compute_leaderboard(shuffled)] == [
        (e.player, e.score) for e in leaderboard
    ]
