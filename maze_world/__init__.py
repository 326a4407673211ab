from .maze import Edge, Grid, UnionFind, Maze, new_maze_state
from .search import (
    SearchEngine, PathReconstructor, SearchError, new_search_state,
    DEPTH_FIRST, BREADTH_FIRST,
)
from .player import PlayerNavigator, new_player_state
from .world import MazeWorld
