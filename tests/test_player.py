import pytest

from maze_world.maze import Maze
from maze_world.player import PlayerNavigator

SQUARE = [((0, 0), (0, 1)), ((0, 0), (1, 0)), ((0, 1), (1, 1)), ((1, 0), (1, 1))]


@pytest.fixture
def square():
    return Maze.from_edges(2, 2, SQUARE)


def test_move_up_follows_edge(square):
    player = PlayerNavigator(square)
    player.position = (1, 1)
    player.path = [(1, 1)]
    assert player.move_up()
    assert player.position == (1, 0)
    assert player.path == [(1, 1), (1, 0)]


def test_move_out_of_bounds_is_noop(square):
    player = PlayerNavigator(square)
    assert player.position == (0, 0)
    assert not player.move_up()
    assert not player.move_left()
    assert player.position == (0, 0)
    assert player.path == [(0, 0)]


def test_wall_blocks_move():
    # (0,0)-(1,0) is a wall here
    maze = Maze.from_edges(2, 2, [((0, 0), (0, 1)), ((0, 1), (1, 1)), ((1, 0), (1, 1))])
    player = PlayerNavigator(maze)
    assert not player.move_right()
    assert player.position == (0, 0)
    assert player.path == [(0, 0)]
    assert player.move_down()
    assert player.position == (0, 1)


def test_reaching_goal_wins_and_replays_history(square):
    player = PlayerNavigator(square)
    player.move_right()
    player.move_down()
    assert player.won
    assert player.is_animating
    assert player.moves == 2
    history = list(player.path)
    for _ in range(len(history)):
        player.animate_step()
    assert player.animator == list(reversed(history))
    assert not player.is_final
    player.animate_step()
    assert player.is_final
    assert not player.is_animating
    assert player.path == []


def test_no_moves_after_win(square):
    player = PlayerNavigator(square)
    player.move_down()
    player.move_right()
    assert player.won
    assert not player.move_up()
    assert player.position == (1, 1)


def test_animate_step_before_win_does_nothing(square):
    player = PlayerNavigator(square)
    player.animate_step()
    assert player.animator == []
    assert player.path == [(0, 0)]


def test_unknown_direction(square):
    player = PlayerNavigator(square)
    with pytest.raises(ValueError):
        player.move('up')
