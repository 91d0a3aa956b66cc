"""Tests for the action rules of MiniGridEnv."""

import unittest

import numpy as np

from minigrid_core.errors import MiniGridError
from minigrid_core.objects import (
    Color, ObjectType, make_ball, make_box, make_door, make_key, make_wall,
)
from minigrid_core.worlds.minigrid_env import Action, EnvConfig
from minigrid_core.worlds.levels import make_layout


def room(row1="#>..#", max_steps=100, objects=None):
    """5x5 walled room whose first interior row is row1."""
    env = make_layout(
        ["#####", row1, "#...#", "#...#", "#####"],
        max_steps=max_steps, objects=objects, rng=np.random.default_rng(0),
    )
    env.reset()
    return env


class TestConfig(unittest.TestCase):
    """EnvConfig validation."""

    def test_defaults_are_valid(self):
        EnvConfig().validate()

    def test_rejects_bad_values(self):
        for kwargs in ({"agent_view_size": 6}, {"agent_view_size": 1},
                       {"width": 2}, {"max_steps": 0}, {"agent_start_dir": 4}):
            with self.assertRaises(ValueError, msg=kwargs):
                EnvConfig(**kwargs).validate()


class TestReset(unittest.TestCase):
    """Episode initialisation."""

    def test_counters(self):
        env = room()
        env.step(Action.LEFT)
        env.carrying = make_key(Color.RED)
        env.reset()
        self.assertEqual(env.step_count, 0)
        self.assertFalse(env.done)
        self.assertEqual(env.carrying.type, ObjectType.EMPTY)

    def test_agent_on_blocked_cell(self):
        env = make_layout(["#####", "#>..#", "#####"],
                          objects={(1, 1): make_wall()})
        with self.assertRaises(MiniGridError):
            env.reset()

    def test_logs_reset(self):
        env = room()
        with self.assertLogs("minigrid_core.worlds.minigrid_env", level="DEBUG") as logs:
            env.reset()
        self.assertIn("Reset LayoutEnv", logs.output[0])


class TestTurning(unittest.TestCase):
    """LEFT / RIGHT rotate the agent."""

    def test_left_then_right_restores(self):
        env = room()
        for d in range(4):
            env.agent_dir = d
            env.step(Action.LEFT)
            env.step(Action.RIGHT)
            self.assertEqual(env.agent_dir, d)
            env.step(Action.RIGHT)
            env.step(Action.LEFT)
            self.assertEqual(env.agent_dir, d)

    def test_wraps(self):
        env = room()
        self.assertEqual(env.agent_dir, 0)
        env.step(Action.LEFT)
        self.assertEqual(env.agent_dir, 3)
        env.step(Action.RIGHT)
        env.step(Action.RIGHT)
        self.assertEqual(env.agent_dir, 1)

    def test_turning_leaves_position(self):
        env = room()
        reward = env.step(Action.RIGHT)
        self.assertEqual(env.agent_pos, (1, 1))
        self.assertEqual(reward, 0.0)


class TestForward(unittest.TestCase):
    """Movement, goal and lava."""

    def test_moves_into_empty(self):
        env = room()
        self.assertEqual(env.front_pos, (2, 1))
        env.step(Action.FORWARD)
        self.assertEqual(env.agent_pos, (2, 1))

    def test_wall_blocks(self):
        env = room("#<..#")
        env.step(Action.FORWARD)
        self.assertEqual(env.agent_pos, (1, 1))

    def test_blocking_objects(self):
        for obj in (make_key(Color.RED), make_ball(Color.RED),
                    make_box(Color.RED), make_door(Color.RED)):
            env = room(objects={(2, 1): obj})
            env.step(Action.FORWARD)
            self.assertEqual(env.agent_pos, (1, 1), obj)

    def test_reach_goal(self):
        env = room("#>.G#")
        self.assertEqual(env.step(Action.FORWARD), 0.0)
        self.assertEqual(env.agent_pos, (2, 1))
        self.assertFalse(env.done)
        reward = env.step(Action.FORWARD)
        self.assertEqual(env.agent_pos, (3, 1))
        self.assertTrue(env.done)
        self.assertAlmostEqual(reward, 1 - 0.9 * (2 / 100))

    def test_goal_reward_decays(self):
        rewards = []
        for wasted in (0, 4, 20, 80):
            env = room("#>G.#")
            for _ in range(wasted):
                env.step(Action.LEFT)
            rewards.append(env.step(Action.FORWARD))
            self.assertTrue(env.done)
        for r in rewards:
            self.assertGreater(r, 0.1)
            self.assertLessEqual(r, 1.0)
        self.assertEqual(rewards, sorted(rewards, reverse=True))
        self.assertEqual(len(set(rewards)), len(rewards))

    def test_lava(self):
        env = room("#>~.#")
        reward = env.step(Action.FORWARD)
        self.assertTrue(env.done)
        self.assertEqual(reward, 0.0)
        self.assertEqual(env.agent_pos, (2, 1))

    def test_off_grid_front_cell(self):
        env = make_layout(["...", "<..", "..."])
        env.reset()
        with self.assertRaises(MiniGridError):
            env.step(Action.FORWARD)


class TestTruncation(unittest.TestCase):
    """max_steps ends the episode."""

    def test_done_on_last_step(self):
        env = room(max_steps=3)
        env.step(Action.LEFT)
        env.step(Action.LEFT)
        self.assertFalse(env.done)
        env.step(Action.LEFT)
        self.assertTrue(env.done)
        self.assertEqual(env.step_count, 3)

    def test_goal_on_last_step_still_pays(self):
        env = room("#>G.#", max_steps=1)
        reward = env.step(Action.FORWARD)
        self.assertTrue(env.done)
        self.assertAlmostEqual(reward, 0.1)


class TestPickupDrop(unittest.TestCase):
    """Carrying objects."""

    def test_pickup_then_drop_restores(self):
        env = room(objects={(2, 1): make_key(Color.BLUE)})
        before = env.grid.copy()
        env.step(Action.PICKUP)
        self.assertEqual(env.carrying, make_key(Color.BLUE))
        self.assertEqual(env.grid.get(2, 1).type, ObjectType.EMPTY)
        env.step(Action.DROP)
        self.assertEqual(env.grid, before)
        self.assertEqual(env.carrying.type, ObjectType.EMPTY)

    def test_pickup_while_carrying(self):
        env = room(objects={(2, 1): make_key(Color.BLUE),
                            (1, 2): make_ball(Color.GREEN)})
        env.step(Action.PICKUP)
        env.step(Action.RIGHT)
        env.step(Action.PICKUP)
        self.assertEqual(env.carrying, make_key(Color.BLUE))
        self.assertEqual(env.grid.get(1, 2), make_ball(Color.GREEN))

    def test_pickup_non_pickable(self):
        env = room("#>G.#")
        env.step(Action.PICKUP)
        self.assertEqual(env.carrying.type, ObjectType.EMPTY)
        self.assertEqual(env.grid.get(2, 1).type, ObjectType.GOAL)

    def test_drop_onto_occupied(self):
        env = room("#<..#")
        env.carrying = make_ball(Color.RED)
        env.step(Action.DROP)
        self.assertEqual(env.carrying, make_ball(Color.RED))
        self.assertEqual(env.grid.get(0, 1).type, ObjectType.WALL)

    def test_drop_with_nothing(self):
        env = room()
        env.step(Action.DROP)
        self.assertEqual(env.grid.get(2, 1).type, ObjectType.EMPTY)


class TestToggle(unittest.TestCase):
    """Doors and boxes."""

    def test_locked_door_wrong_key(self):
        env = room(objects={(2, 1): make_door(Color.YELLOW, is_locked=True)})
        env.carrying = make_key(Color.RED)
        env.step(Action.TOGGLE)
        door = env.grid.get(2, 1)
        self.assertFalse(door.is_open)
        env.step(Action.FORWARD)
        self.assertEqual(env.agent_pos, (1, 1))

    def test_locked_door_without_key(self):
        env = room(objects={(2, 1): make_door(Color.YELLOW, is_locked=True)})
        env.step(Action.TOGGLE)
        self.assertFalse(env.grid.get(2, 1).is_open)

    def test_locked_door_matching_key(self):
        env = room(objects={(2, 1): make_door(Color.YELLOW, is_locked=True)})
        env.carrying = make_key(Color.YELLOW)
        env.step(Action.TOGGLE)
        door = env.grid.get(2, 1)
        self.assertTrue(door.is_open)
        self.assertTrue(door.is_locked)
        env.step(Action.FORWARD)
        self.assertEqual(env.agent_pos, (2, 1))
        # The key is not consumed
        self.assertEqual(env.carrying, make_key(Color.YELLOW))

    def test_locked_door_stays_open_when_toggled_again(self):
        env = room(objects={(2, 1): make_door(Color.YELLOW, is_locked=True)})
        env.carrying = make_key(Color.YELLOW)
        env.step(Action.TOGGLE)
        env.step(Action.TOGGLE)
        self.assertTrue(env.grid.get(2, 1).is_open)

    def test_unlocked_door_flips(self):
        env = room(objects={(2, 1): make_door(Color.BLUE)})
        env.step(Action.TOGGLE)
        self.assertTrue(env.grid.get(2, 1).is_open)
        env.step(Action.TOGGLE)
        self.assertFalse(env.grid.get(2, 1).is_open)

    def test_box_unwraps_one_level(self):
        inner = make_box(Color.RED, make_ball(Color.BLUE))
        env = room(objects={(2, 1): make_box(Color.GREEN, inner)})
        env.step(Action.TOGGLE)
        self.assertEqual(env.grid.get(2, 1), make_box(Color.RED, make_ball(Color.BLUE)))
        env.step(Action.TOGGLE)
        self.assertEqual(env.grid.get(2, 1), make_ball(Color.BLUE))
        env.step(Action.TOGGLE)
        self.assertEqual(env.grid.get(2, 1), make_ball(Color.BLUE))

    def test_empty_box_vanishes(self):
        env = room(objects={(2, 1): make_box(Color.GREEN)})
        env.step(Action.TOGGLE)
        self.assertEqual(env.grid.get(2, 1).type, ObjectType.EMPTY)

    def test_toggle_wall(self):
        env = room("#<..#")
        env.step(Action.TOGGLE)
        self.assertEqual(env.grid.get(0, 1).type, ObjectType.WALL)


class TestContract(unittest.TestCase):
    """DONE is a no-op; invalid input raises."""

    def test_done_action(self):
        env = room()
        before = env.grid.copy()
        reward = env.step(Action.DONE)
        self.assertEqual(reward, 0.0)
        self.assertFalse(env.done)
        self.assertEqual(env.agent_pos, (1, 1))
        self.assertEqual(env.grid, before)
        self.assertEqual(env.step_count, 1)

    def test_unknown_action(self):
        env = room()
        with self.assertRaises(MiniGridError):
            env.step(7)
        with self.assertRaises(MiniGridError):
            env.step(-1)

    def test_non_integer_action(self):
        env = room()
        for action in (2.0, True, "2", None):
            with self.assertRaises(MiniGridError, msg=repr(action)):
                env.step(action)
        self.assertEqual(env.agent_pos, (1, 1))
        self.assertEqual(env.step_count, 0)

    def test_numpy_integer_action(self):
        env = room()
        env.step(np.int64(2))
        self.assertEqual(env.agent_pos, (2, 1))

    def test_bad_direction(self):
        env = room()
        env.agent_dir = 5
        with self.assertRaises(MiniGridError):
            env.step(Action.FORWARD)

    def test_plain_int_actions(self):
        env = room()
        env.step(2)
        self.assertEqual(env.agent_pos, (2, 1))


if __name__ == "__main__":
    unittest.main()
