import random
import logging

from .maze import MAZE_WIDTH, MAZE_HEIGHT, new_maze_state
from .player import new_player_state
from .search import DEPTH_FIRST, BREADTH_FIRST, new_search_state

logger = logging.getLogger(__name__)


class MazeWorld:
    """
    One maze session: the maze, a depth-first and a breadth-first search, and
    the manual player.

    Ownership:
      - self.maze is shared read-only by everything below
      - self.dfs / self.bfs each own their frontier, visited set and path
      - self.player owns position and move history

    Modes:
      - self.display selects which search the renderer shows ('DFS', 'BFS' or
        None). Both searches keep running regardless of which one is shown.
      - self.manual_mode enables player moves.

    Integration:
      - A renderer reads the fields above after every tick()
      - Input handling calls arm_depth_first/arm_breadth_first,
        enter_manual_mode/exit_manual_mode, move and reset_maze
    """
    def __init__(self, width=MAZE_WIDTH, height=MAZE_HEIGHT, seed=None):
        self.rand = random.Random(seed)
        self.reset_maze(width, height)

    def reset_maze(self, width=None, height=None, seed=None):
        """Builds a new maze and discards all search and player state."""
        width = self.width if width is None else width
        height = self.height if height is None else height
        if width < 1 or height < 1:
            raise ValueError(f"Maze dimensions must be positive, got {width}x{height}")
        if seed is not None:
            self.rand = random.Random(seed)
        self.width = width
        self.height = height
        self.maze = new_maze_state(width, height, rand=self.rand)
        self.dfs = new_search_state(self.maze, DEPTH_FIRST, armed=False)
        self.bfs = new_search_state(self.maze, BREADTH_FIRST, armed=False)
        self.player = new_player_state(self.maze)
        self.display = None
        self.manual_mode = False
        logger.debug("Maze reset to %dx%d", width, height)

    @property
    def searching_depth_first(self):
        return self.display == DEPTH_FIRST

    @property
    def searching_breadth_first(self):
        return self.display == BREADTH_FIRST

    @property
    def won(self):
        return self.player.won

    def _arm(self, algorithm):
        # Already searching: only switch which search is displayed
        if self.display is None:
            self.dfs = new_search_state(self.maze, DEPTH_FIRST)
            self.bfs = new_search_state(self.maze, BREADTH_FIRST)
        self.display = algorithm

    def arm_depth_first(self):
        self._arm(DEPTH_FIRST)

    def arm_breadth_first(self):
        self._arm(BREADTH_FIRST)

    def enter_manual_mode(self):
        if self.display is None:
            self.manual_mode = True

    def exit_manual_mode(self):
        self.player = new_player_state(self.maze)
        self.manual_mode = False

    def move(self, direction):
        if not self.manual_mode:
            return False
        return self.player.move(direction)

    def tick(self):
        """Advances every active state machine by one unit of work, in a fixed order."""
        if self.dfs.is_running:
            self.dfs.advance()
        if self.bfs.is_running:
            self.bfs.advance()
        if self.dfs.is_reconstructing:
            self.dfs.reconstruct_step()
        if self.bfs.is_reconstructing:
            self.bfs.reconstruct_step()
        if self.player.is_animating:
            self.player.animate_step()

    def mode_name(self):
        if self.searching_depth_first:
            return "DFS"
        if self.searching_breadth_first:
            return "BFS"
        if self.manual_mode:
            return "Manual"
        return "None"

    def status(self):
        """Snapshot of the numbers a renderer would print under the maze."""
        return {
            'mode': self.mode_name(),
            'dfs_state': self.dfs.state,
            'dfs_visited': len(self.dfs.visited),
            'dfs_path_length': len(self.dfs.path),
            'dfs_wrong_moves': self.dfs.wrong_moves,
            'bfs_state': self.bfs.state,
            'bfs_visited': len(self.bfs.visited),
            'bfs_path_length': len(self.bfs.path),
            'bfs_wrong_moves': self.bfs.wrong_moves,
            'player_position': self.player.position,
            'player_moves': self.player.moves,
            'won': self.won,
        }
