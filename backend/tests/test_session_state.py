"""SessionState against an in-memory store and a manual scheduler."""
import itertools
import unittest
from datetime import timedelta

import pytest

from liftlog.engine import (
    InvalidTransition,
    ManualScheduler,
    SessionState,
    SessionStatus,
    evaluate_session,
)
from liftlog.models import Exercise, ProgressionRule, Routine, RoutineExercise
from liftlog.models.enums import ProgressionTrigger, WeightUnit

class FakeStore:
    def __init__(self, exercises):
        self.exercises = {ex.id: ex for ex in exercises}
        self.sessions = []
        self.saves = 0
        self._ids = itertools.count(1)
        # routine exercise ids deleted behind the live workout
        self.removed = set()

    def add_session(self, session):
        session.id = next(self._ids)
        for set_log in session.set_logs:
            set_log.id = next(self._ids)
        self.sessions.append(session)

    def delete_session(self, session):
        self.sessions.remove(session)

    def get_exercise(self, exercise_id):
        return self.exercises.get(exercise_id)

    def reload_routine_exercise(self, routine_exercise):
        return None if routine_exercise.id in self.removed else routine_exercise

    def save(self):
        self.saves += 1

SQUAT = Exercise(id=1, name="Barbell Back Squat")
BENCH = Exercise(id=2, name="Barbell Bench Press")

def routine_exercise(re_id, exercise_id, order, sets=3, rest=90, rule=True):
    re = RoutineExercise(
        id=re_id, exercise_id=exercise_id, order=order, target_sets=sets,
        target_rep_min=5, target_rep_max=5, rest_seconds=rest,
    )
    if rule:
        re.progression_rule = ProgressionRule(
            increment_amount=5.0, unit=WeightUnit.kg,
            trigger_type=ProgressionTrigger.all_sets_completed, consecutive_failures=0,
            deload_percentage=0.1, deload_after_failures=3,
        )
    return re

def make_routine():
    routine = Routine(id=7, name="Day A")
    # stored out of order on purpose
    routine.exercises.append(routine_exercise(11, 2, order=1, sets=2, rest=0, rule=False))
    routine.exercises.append(routine_exercise(10, 1, order=0))
    return routine

class SessionStateTest(unittest.TestCase):
    def setUp(self):
        self.scheduler = ManualScheduler()
        self.store = FakeStore([SQUAT, BENCH])
        self.state = SessionState(self.store, self.scheduler, clock=self.scheduler.now)

    def start(self):
        return self.state.start(make_routine())

    def test_start_builds_skeleton(self):
        session = self.start()
        self.assertEqual(self.state.status, SessionStatus.active)
        self.assertEqual(session.start_time, self.scheduler.now())
        self.assertIsNone(session.end_time)
        self.assertEqual(self.state.exercise_count, 2)
        self.assertEqual(self.state.current_routine_exercise.id, 10)
        self.assertEqual(self.state.total_sets, 5)
        self.assertEqual(self.state.completed_sets, 0)
        current = self.state.current_set_logs
        self.assertEqual([s.set_number for s in current], [1, 2, 3])
        self.assertTrue(all(s.target_weight == 0 and s.target_reps == 5 for s in current))
        # unit from the rule, otherwise the default
        self.assertEqual(current[0].unit, WeightUnit.kg)
        bench = self.state.set_logs_for(self.state.routine_exercises[1])
        self.assertEqual(bench[0].unit, WeightUnit.lb)
        self.assertEqual(self.store.sessions, [session])

    def test_start_twice_rejected(self):
        self.start()
        with self.assertRaises(InvalidTransition):
            self.state.start(make_routine())

    def test_complete_set_starts_rest(self):
        self.start()
        first = self.state.current_set_logs[0]
        self.scheduler.advance(42)
        self.state.complete_set(first, 5, 100.0, rpe=8)
        self.assertTrue(first.is_completed)
        self.assertEqual((first.actual_reps, first.actual_weight, first.rpe), (5, 100.0, 8))
        self.assertEqual(first.timestamp, self.scheduler.now())
        self.assertEqual(self.state.completed_sets, 1)
        self.assertTrue(self.state.is_resting)
        self.assertEqual(self.state.rest_remaining, 90)
        self.scheduler.advance(90)
        self.assertFalse(self.state.is_resting)
        self.assertEqual(self.state.rest_remaining, 0)

    def test_zero_rest_does_not_start_timer(self):
        self.start()
        self.state.next_exercise()
        self.state.complete_set(self.state.current_set_logs[0], 5, 60.0)
        self.assertFalse(self.state.is_resting)

    def test_uncomplete_keeps_timer(self):
        self.start()
        first = self.state.current_set_logs[0]
        self.state.complete_set(first, 5, 100.0)
        self.state.uncomplete_set(first)
        self.assertFalse(first.is_completed)
        self.assertEqual(first.actual_reps, 0)
        self.assertTrue(self.state.is_resting)

    def test_foreign_set_rejected(self):
        other = SessionState(FakeStore([SQUAT, BENCH]), self.scheduler)
        other.start(make_routine())
        self.start()
        with self.assertRaises(InvalidTransition):
            self.state.complete_set(other.current_set_logs[0], 5, 100.0)

    def test_navigation_bounds(self):
        self.start()
        self.state.previous_exercise()
        self.assertEqual(self.state.current_exercise_index, 0)
        self.state.go_to(5)
        self.state.go_to(-1)
        self.assertEqual(self.state.current_exercise_index, 0)
        self.state.next_exercise()
        self.state.next_exercise()
        self.assertEqual(self.state.current_exercise_index, 1)
        self.assertEqual(self.state.current_routine_exercise.id, 11)

    def test_navigation_stops_rest(self):
        self.start()
        self.state.complete_set(self.state.current_set_logs[0], 5, 100.0)
        self.state.go_to(1)
        self.assertFalse(self.state.is_resting)
        self.assertEqual(self.scheduler.pending, 0)

    def test_out_of_range_keeps_rest(self):
        self.start()
        self.state.complete_set(self.state.current_set_logs[0], 5, 100.0)
        self.state.go_to(9)
        self.assertTrue(self.state.is_resting)

    def test_weight_edits(self):
        self.start()
        first, second, third = self.state.current_set_logs
        self.state.set_weight_for_all(100.0)
        self.assertEqual([s.target_weight for s in (first, second, third)], [100.0] * 3)
        self.assertEqual(first.actual_weight, 100.0)
        self.state.complete_set(first, 5, 100.0)
        self.state.adjust_weight(first, 5.0)
        self.assertEqual(first.target_weight, 105.0)
        # completed sets keep what was actually lifted
        self.assertEqual(first.actual_weight, 100.0)
        self.state.adjust_weight(second, -500.0)
        self.assertEqual(second.target_weight, 0.0)
        self.assertEqual(second.actual_weight, 0.0)
        self.state.toggle_warmup(third)
        self.state.set_weight_for_all(120.0)
        self.assertTrue(third.is_warmup)
        self.assertEqual(third.target_weight, 100.0)

    def test_rest_controls(self):
        self.start()
        self.state.complete_set(self.state.current_set_logs[0], 5, 100.0)
        self.state.extend_rest(30)
        self.assertEqual(self.state.rest_remaining, 120)
        self.state.skip_rest()
        self.assertFalse(self.state.is_resting)

    def test_finish_is_terminal(self):
        session = self.start()
        self.state.complete_set(self.state.current_set_logs[0], 5, 100.0)
        self.scheduler.advance(3600 + 120)
        finished = self.state.finish()
        self.assertIs(finished, session)
        self.assertTrue(session.is_completed)
        self.assertEqual(session.end_time - session.start_time, timedelta(seconds=3720))
        self.assertEqual(session.duration_display, "1h 2m")
        self.assertFalse(self.state.is_resting)
        self.assertEqual(self.state.status, SessionStatus.finished)
        for op in (self.state.finish, self.state.discard, self.state.next_exercise, self.state.skip_rest):
            with self.assertRaises(InvalidTransition):
                op()
        with self.assertRaises(InvalidTransition):
            self.state.complete_set(session.set_logs[1], 5, 100.0)

    def test_discard_deletes_session(self):
        self.start()
        self.state.complete_set(self.state.current_set_logs[0], 5, 100.0)
        self.state.discard()
        self.assertEqual(self.store.sessions, [])
        self.assertIsNone(self.state.session)
        self.assertEqual(self.state.status, SessionStatus.discarded)
        self.assertEqual(self.scheduler.pending, 0)
        with self.assertRaises(InvalidTransition):
            self.state.finish()

    def test_idle_rejects_everything(self):
        with self.assertRaises(InvalidTransition):
            self.state.finish()
        with self.assertRaises(InvalidTransition):
            self.state.next_exercise()
        with self.assertRaises(InvalidTransition):
            self.state.extend_rest(30)

def test_deleted_exercise_keeps_slot_without_sets():
    scheduler = ManualScheduler()
    store = FakeStore([SQUAT])
    routine = Routine(id=3, name="Day B")
    routine.exercises.append(routine_exercise(20, 1, order=0, sets=2))
    routine.exercises.append(routine_exercise(21, None, order=1, sets=4))
    state = SessionState(store, scheduler, clock=scheduler.now)
    state.start(routine)
    assert state.exercise_count == 2
    assert state.total_sets == 2
    state.next_exercise()
    assert state.current_set_logs == []
    assert state.snapshot()["current_exercise_name"] is None

def test_version_and_listeners():
    scheduler = ManualScheduler()
    state = SessionState(FakeStore([SQUAT, BENCH]), scheduler, clock=scheduler.now)
    seen = []
    unsubscribe = state.subscribe(lambda s: seen.append(s.version))
    state.start(make_routine())
    state.complete_set(state.current_set_logs[0], 5, 100.0)
    scheduler.advance(2)
    assert seen == sorted(seen) and len(seen) >= 4
    assert seen[-1] == state.version
    unsubscribe()
    state.skip_rest()
    assert seen[-1] < state.version

def test_snapshot_fields():
    scheduler = ManualScheduler()
    state = SessionState(FakeStore([SQUAT, BENCH]), scheduler, clock=scheduler.now)
    state.start(make_routine())
    snap = state.snapshot()
    assert snap["status"] == "active"
    assert snap["routine_name"] == "Day A"
    assert snap["current_exercise_name"] == "Barbell Back Squat"
    assert snap["rest_seconds"] == 90
    assert len(snap["current_set_logs"]) == 3
    assert snap["exercise_count"] == 2 and snap["total_sets"] == 5

def test_evaluate_session_requires_finish():
    scheduler = ManualScheduler()
    store = FakeStore([SQUAT, BENCH])
    state = SessionState(store, scheduler, clock=scheduler.now)
    state.start(make_routine())
    with pytest.raises(InvalidTransition):
        evaluate_session(state)
    for set_log in state.current_set_logs:
        state.set_weight_for_all(100.0)
        state.complete_set(set_log, 5, 100.0)
    state.finish()
    results = evaluate_session(state)
    # bench has no rule and is skipped
    assert len(results) == 1
    re, result = results[0]
    assert re.id == 10
    assert result.exercise_name == "Barbell Back Squat"
    assert result.new_weight == 105.0
    assert result.message == "Increase weight to 105 kg"

def test_evaluate_session_skips_routine_exercise_removed_mid_workout():
    scheduler = ManualScheduler()
    store = FakeStore([SQUAT, BENCH])
    state = SessionState(store, scheduler, clock=scheduler.now)
    state.start(make_routine())
    rule = state.current_routine_exercise.progression_rule
    for set_log in state.current_set_logs:
        state.complete_set(set_log, 5, 100.0)
    store.removed.add(10)
    state.finish()
    assert evaluate_session(state) == []
    assert rule.consecutive_failures == 0
