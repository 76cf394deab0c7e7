"""Tests for queue tiers, interleaving and the queue board view."""

from datetime import timedelta

import pytest

from src.queueing.optimizer import QueueTier, get_tier, optimize_queue
from src.queueing.view import build_queue, score_customer, summarize_queue
from src.schemas.customer_schema import CustomerStatus, PriorityLevel
from tests.conftest import NOW, make_record, make_scored


def ids(customers):
    return [c.id for c in customers]


class TestGetTier:
    @pytest.mark.parametrize(
        "score,tier",
        [
            (0.95, QueueTier.HIGH),
            (0.61, QueueTier.HIGH),
            (0.6, QueueTier.MEDIUM),
            (0.31, QueueTier.MEDIUM),
            (0.3, QueueTier.LOW),
            (0.0, QueueTier.LOW),
        ],
    )
    def test_thresholds(self, score, tier):
        assert get_tier(score) == tier


class TestOptimizeQueue:
    def test_interleaves_high_and_medium(self):
        customers = [
            make_scored(1, 0.9),
            make_scored(2, 0.8),
            make_scored(3, 0.7),
            make_scored(4, 0.5),
            make_scored(5, 0.4),
            make_scored(6, 0.2),
        ]
        assert ids(optimize_queue(customers)) == [1, 4, 2, 5, 3, 6]

    def test_sorts_unsorted_input(self):
        customers = [make_scored(1, 0.2), make_scored(2, 0.5), make_scored(3, 0.9)]
        assert ids(optimize_queue(customers)) == [3, 2, 1]

    def test_medium_remainder_follows_interleave(self):
        customers = [
            make_scored(1, 0.9),
            make_scored(2, 0.5),
            make_scored(3, 0.45),
            make_scored(4, 0.4),
        ]
        assert ids(optimize_queue(customers)) == [1, 2, 3, 4]

    def test_high_remainder_follows_interleave(self):
        customers = [
            make_scored(1, 0.9),
            make_scored(2, 0.85),
            make_scored(3, 0.8),
            make_scored(4, 0.5),
        ]
        assert ids(optimize_queue(customers)) == [1, 4, 2, 3]

    def test_low_tier_always_last(self):
        customers = [make_scored(1, 0.1), make_scored(2, 0.25), make_scored(3, 0.7)]
        result = optimize_queue(customers)
        assert ids(result) == [3, 2, 1]
        assert all(get_tier(c.adjusted_score) == QueueTier.LOW for c in result[1:])

    def test_ties_keep_input_order(self):
        customers = [make_scored(1, 0.5), make_scored(2, 0.5), make_scored(3, 0.5)]
        assert ids(optimize_queue(customers)) == [1, 2, 3]

    def test_output_is_permutation(self):
        customers = [make_scored(i, (i % 10) / 10) for i in range(1, 21)]
        assert sorted(ids(optimize_queue(customers))) == list(range(1, 21))

    def test_does_not_mutate_input(self):
        customers = [make_scored(1, 0.2), make_scored(2, 0.9)]
        snapshot = list(customers)
        optimize_queue(customers)
        assert customers == snapshot

    def test_empty_queue(self):
        assert optimize_queue([]) == []


class TestScoreCustomer:
    def test_adjusted_score_uses_wait_time(self):
        record = make_record(score=0.95, minutes_ago=180)
        scored = score_customer(record, NOW)
        assert scored.adjusted_score == pytest.approx(0.57)
        assert scored.priority_level == PriorityLevel.CRITICAL
        assert scored.score == 0.95

    def test_rescoring_a_scored_customer(self):
        scored = score_customer(make_record(score=0.5), NOW)
        again = score_customer(scored, NOW + timedelta(hours=2))
        assert again.adjusted_score == pytest.approx(0.4)


class TestBuildQueue:
    def records(self):
        return [
            make_record(1, score=0.9, minutes_ago=10, name="zoe"),
            make_record(2, score=0.5, minutes_ago=40, name="Adam"),
            make_record(3, score=0.1, minutes_ago=20, name="mia"),
            make_record(4, score=0.85, minutes_ago=5, name="Bob",
                        status=CustomerStatus.SCHEDULED),
        ]

    def test_default_excludes_scheduled(self):
        assert ids(build_queue(self.records(), NOW)) == [1, 2, 3]

    def test_include_scheduled(self):
        queue = build_queue(self.records(), NOW, include_scheduled=True)
        assert ids(queue) == [1, 2, 4, 3]

    def test_sort_by_wait_time_longest_first(self):
        assert ids(build_queue(self.records(), NOW, sort_by="wait_time")) == [2, 3, 1]

    def test_sort_by_name_case_insensitive(self):
        assert ids(build_queue(self.records(), NOW, sort_by="name")) == [2, 3, 1]

    def test_priority_filter(self):
        queue = build_queue(self.records(), NOW, priority_filter="Critical")
        assert ids(queue) == [1]

    def test_priority_filter_with_space(self):
        queue = build_queue(self.records(), NOW, priority_filter="Very Low")
        assert ids(queue) == [3]

    def test_unknown_sort_key(self):
        with pytest.raises(ValueError, match="Unknown sort key"):
            build_queue(self.records(), NOW, sort_by="height")

    def test_unknown_priority_filter(self):
        with pytest.raises(ValueError, match="Unknown priority filter"):
            build_queue(self.records(), NOW, priority_filter="urgent")

    def test_decay_reorders_long_waiters(self):
        records = [
            make_record(1, score=0.95, minutes_ago=300),
            make_record(2, score=0.7, minutes_ago=5),
        ]
        assert ids(build_queue(records, NOW)) == [2, 1]


class TestSummarizeQueue:
    def test_summary_figures(self):
        queue = build_queue(
            [
                make_record(1, score=0.9, minutes_ago=10),
                make_record(2, score=0.5, minutes_ago=30),
                make_record(3, score=0.8, minutes_ago=20, status=CustomerStatus.SCHEDULED),
            ],
            NOW,
            include_scheduled=True,
        )
        summary = summarize_queue(queue, NOW)
        assert summary.total == 3
        assert summary.high_priority == 2
        assert summary.average_wait_minutes == pytest.approx(20.0)
        assert summary.waiting == 2
        assert summary.scheduled == 1

    def test_empty_summary(self):
        summary = summarize_queue([], NOW)
        assert summary.total == 0
        assert summary.average_wait_minutes == 0.0
