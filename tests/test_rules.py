"""Tests for rules.py - wall, food and obstacle effects."""

import random
from unittest.mock import patch

import pytest

from gridblob.config import Config, STILL
from gridblob.controls import Direction
from gridblob.game import GameSession, Phase
from gridblob.grid import Grid
from gridblob.rules import Event, apply_rules


def arrange(session, position, food=(0, 0), obstacle=(380, 380), direction=STILL, size=None):
    session.avatar.x, session.avatar.y = position
    session.food = food
    session.obstacle = obstacle
    session.direction = direction
    if size is not None:
        session.avatar.size = size
    return session


class TestFood:
    def test_eating_scores_and_shrinks(self, session):
        arrange(session, (100, 100), food=(100, 100))
        with patch.object(session.spawner, "spawn_food", return_value=(40, 60)):
            events = session.step()

        assert events == [Event.FOOD]
        assert session.score == 10
        assert session.size == 9
        assert session.food == (40, 60)
        assert session.is_running

    def test_shrink_is_floored_at_min_size(self, session):
        arrange(session, (100, 100), food=(100, 100), size=5)
        session.step()
        assert session.size == 5
        assert session.score == 10

    def test_respawned_food_is_on_grid(self, session):
        arrange(session, (100, 100), food=(100, 100))
        session.step()
        assert session.grid.is_aligned(session.food)
        assert session.grid.contains(session.food)

    def test_eating_after_a_move(self, session):
        arrange(session, (100, 100), food=(120, 100), direction=Direction.RIGHT.value)
        assert session.step() == [Event.FOOD]
        assert session.position == (120, 100)

    def test_near_miss_changes_nothing(self, session):
        arrange(session, (100, 100), food=(140, 100), direction=Direction.RIGHT.value)
        assert session.step() == []
        assert session.score == 0
        assert session.size == 10


class TestObstacle:
    @pytest.mark.parametrize("before", [5, 10, 17])
    def test_hit_costs_five_and_grows_two(self, session, before):
        arrange(session, (100, 100), obstacle=(100, 100), size=before)
        events = session.step()

        assert events == [Event.OBSTACLE]
        assert session.score == -5
        assert session.size == before + 2
        assert session.obstacle != session.food

    def test_score_can_go_negative(self, session):
        arrange(session, (100, 100), obstacle=(100, 100))
        session.step()
        session.obstacle = session.position
        session.step()
        assert session.score == -10

    def test_reaching_max_size_ends_the_run(self, session):
        arrange(session, (100, 100), obstacle=(100, 100), size=18)
        events = session.step()

        assert events == [Event.MAX_SIZE]
        assert session.size == 20
        assert session.is_game_over
        assert session.final_score == -5
        # no respawn on the terminal hit
        assert session.obstacle == (100, 100)

    def test_growth_lands_before_cap_test(self, session):
        arrange(session, (100, 100), obstacle=(100, 100), size=19)
        session.step()
        assert session.size == 21
        assert session.is_game_over

    def test_step_after_max_size_is_inert(self, session):
        arrange(session, (100, 100), obstacle=(120, 100), size=18,
                direction=Direction.RIGHT.value)
        session.step()
        assert session.is_game_over
        before = session.snapshot()

        assert session.step() == []
        after = session.snapshot()
        assert after.position == before.position
        assert after.score == before.score
        assert after.size == before.size


class TestWall:
    def test_leaving_left_edge_ends_the_run(self, session):
        arrange(session, (0, 100), direction=Direction.LEFT.value)
        events = session.step()

        assert events == [Event.WALL]
        assert session.position == (-20, 100)
        assert session.is_game_over

    def test_wall_preempts_item_checks(self, session):
        arrange(session, (0, 100), food=(-20, 100), obstacle=(-20, 100),
                direction=Direction.LEFT.value)
        session.step()

        assert session.is_game_over
        assert session.score == 0
        assert session.size == 10
        assert session.food == (-20, 100)

    @pytest.mark.parametrize("start,direction", [
        ((380, 100), Direction.RIGHT),
        ((100, 0), Direction.UP),
        ((100, 380), Direction.DOWN),
    ])
    def test_every_edge_is_a_wall(self, session, start, direction):
        arrange(session, start, direction=direction.value)
        assert session.step() == [Event.WALL]

    def test_last_cell_is_still_inside(self, session):
        arrange(session, (360, 100), food=(0, 0), direction=Direction.RIGHT.value)
        assert session.step() == []
        assert session.is_running


class TestApplyRules:
    def test_food_and_obstacle_are_independent(self, session):
        arrange(session, (100, 100), food=(100, 100), obstacle=(100, 100))
        events = apply_rules(session)
        assert events == [Event.FOOD, Event.OBSTACLE]
        assert session.score == 5
        assert session.size == 11

    def test_rules_before_spawn_are_a_precondition_error(self):
        s = GameSession(grid=Grid(400, 400, 20), config=Config(), rng=random.Random(0))
        assert s.phase is Phase.READY
        with pytest.raises(RuntimeError):
            apply_rules(s)
