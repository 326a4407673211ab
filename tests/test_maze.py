import random
import collections

import pytest

from maze_world.maze import Edge, Grid, UnionFind, Maze, new_maze_state


def _reachable(maze, start):
    seen = {start}
    queue = collections.deque([start])
    while queue:
        v = queue.popleft()
        for e in maze.incident_edges(v):
            n = e.other(v)
            if n not in seen:
                seen.add(n)
                queue.append(n)
    return seen


def _is_tree_without(maze, removed):
    pairs = [(e.source, e.destination) for e in maze.edges if e is not removed]
    smaller = Maze.from_edges(maze.width, maze.height, pairs)
    return smaller.is_connected()


@pytest.mark.parametrize("width,height", [(1, 1), (1, 7), (6, 1), (2, 2), (5, 8), (20, 20)])
def test_kruskal_builds_spanning_tree(width, height):
    maze = Maze(width, height, random.Random(width * 100 + height))
    assert len(maze.edges) == width * height - 1
    assert len(_reachable(maze, (0, 0))) == width * height
    assert maze.is_perfect()


def test_removing_any_edge_disconnects():
    maze = new_maze_state(6, 5, seed=3)
    for edge in maze.edges:
        assert not _is_tree_without(maze, edge)


def test_union_find_never_cycles_after_construction():
    maze = new_maze_state(12, 9, seed=11)
    uf = maze.union_find
    assert uf.tree_count() == 1
    for v in maze.grid_cells:
        assert not uf.contains_cycle(v)
        assert uf.connected(v, (0, 0))


def test_empty_grid_terminates():
    maze = Maze(0, 0, random.Random(1))
    assert maze.edges == []
    assert maze.is_perfect()


def test_same_seed_same_maze():
    a = new_maze_state(10, 10, seed=42)
    b = new_maze_state(10, 10, seed=42)
    assert [(e.source, e.destination) for e in a.edges] == [(e.source, e.destination) for e in b.edges]


def test_edges_only_join_grid_neighbours():
    maze = new_maze_state(9, 7, seed=5)
    for e in maze.edges:
        (x1, y1), (x2, y2) = e.source, e.destination
        assert abs(x1 - x2) + abs(y1 - y2) == 1


def test_worklist_sorted_and_complete():
    maze = new_maze_state(4, 3, seed=8)
    worklist = maze.generate_worklist()
    # 2 * w * h - w - h candidates
    assert len(worklist) == 2 * 4 * 3 - 4 - 3
    weights = [e.weight for e in worklist]
    assert weights == sorted(weights)
    assert all(0 <= w < 1000 for w in weights)


def test_worklist_ties_keep_generation_order():
    class ZeroRandom(random.Random):
        def randrange(self, *args, **kwargs):
            return 0

    maze = Maze(3, 2, ZeroRandom())
    pairs = [(e.source, e.destination) for e in maze.generate_worklist()]
    assert pairs == list(maze.grid_cells.adjacent_pairs())


def test_grid_layout_and_bounds():
    grid = Grid(3, 2)
    assert grid.vertices[1][2] == (2, 1)
    assert grid.vertex(0, 1) == (0, 1)
    assert len(grid) == 6
    with pytest.raises(IndexError):
        grid.vertex(3, 0)
    with pytest.raises(IndexError):
        grid.vertex(0, -1)
    with pytest.raises(ValueError):
        Grid(-1, 2)


def test_union_policy_repoints_singleton_at_other_vertex():
    uf = UnionFind([(0, 0), (1, 0), (2, 0)])
    uf.union((0, 0), (1, 0))
    assert uf.representatives[(0, 0)] == (1, 0)
    uf.union((0, 0), (2, 0))
    assert uf.find((0, 0)) == (2, 0)
    assert uf.find((1, 0)) == (2, 0)
    assert uf.tree_count() == 1


def test_contains_cycle_detects_broken_links():
    uf = UnionFind([(0, 0), (1, 0)])
    uf.representatives[(0, 0)] = (1, 0)
    uf.representatives[(1, 0)] = (0, 0)
    assert uf.contains_cycle((0, 0))


def test_edge_helpers():
    e = Edge((0, 0), (1, 0), 7)
    assert e.has_vertex((1, 0))
    assert not e.has_vertex((1, 1))
    assert e.other((0, 0)) == (1, 0)
    assert e.connects((1, 0), (0, 0))
    with pytest.raises(ValueError):
        e.other((5, 5))


def test_directions_match_edges():
    maze = Maze.from_edges(2, 2, [((0, 0), (1, 0)), ((0, 0), (0, 1))])
    assert maze.get_valid_moves(0, 0) == {'E', 'S'}
    assert maze.get_valid_moves(1, 0) == {'W'}
    assert sorted(maze.get_neighbors(0, 0)) == [(0, 1), (1, 0)]
    assert maze.edge_between((1, 0), (0, 0)) is not None
    assert maze.edge_between((1, 0), (1, 1)) is None


def test_fixed_edge_maze_has_same_fields_as_generated_maze():
    generated = new_maze_state(2, 2, seed=1)
    fixed = Maze.from_edges(2, 2, [(e.source, e.destination) for e in generated.edges])
    assert set(vars(fixed)) == set(vars(generated))
    assert fixed.union_find is None
    assert fixed.is_perfect()


def test_from_edges_rejects_diagonals():
    with pytest.raises(ValueError):
        Maze.from_edges(2, 2, [((0, 0), (1, 1))])
    with pytest.raises(IndexError):
        Maze.from_edges(2, 2, [((1, 1), (2, 1))])
