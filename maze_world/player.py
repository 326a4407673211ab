import logging

from .maze import DIRECTIONS

logger = logging.getLogger(__name__)


class PlayerNavigator:
    """
    The manually steered agent.

    Movement Logic:
      - 'N': y - 1 (up)    'S': y + 1 (down)
      - 'W': x - 1 (left)  'E': x + 1 (right)
      - Leaving the grid is a silent no-op.
      - Otherwise the move is only taken if a maze edge joins the two cells;
        grid adjacency alone is not enough. A wall is a silent no-op too.

    State:
      - position: current cell, starts at maze.start
      - path: move history, start first
      - animator: history replayed backward after a win, one vertex per tick
    """
    def __init__(self, maze):
        self.maze = maze
        self.position = maze.start
        self.path = [self.position]
        self.animator = []
        self.moves = 0
        self.won = False
        self.is_animating = False
        self.is_final = False

    def move(self, direction):
        """Tries one step in the given direction. Returns True if the player moved."""
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction: {direction!r}")
        if self.won:
            return False
        dx, dy, _ = DIRECTIONS[direction]
        x, y = self.position
        nx, ny = x + dx, y + dy
        if not self.maze.grid_cells.in_bounds(nx, ny):
            return False

        moved = False
        if self.maze.edge_between(self.position, (nx, ny)) is not None:
            self.position = (nx, ny)
            self.path.append(self.position)
            self.moves += 1
            moved = True

        if self.position == self.maze.goal:
            self.won = True
            self.is_animating = True
            logger.debug("Player reached the goal in %d moves", self.moves)
        return moved

    def move_up(self):
        return self.move('N')

    def move_down(self):
        return self.move('S')

    def move_left(self):
        return self.move('W')

    def move_right(self):
        return self.move('E')

    def animate_step(self):
        """Moves one vertex from the end of the history onto the animator."""
        if not self.is_animating:
            return
        if not self.path:
            self.is_animating = False
            self.is_final = True
            return
        self.animator.append(self.path.pop())


def new_player_state(maze):
    return PlayerNavigator(maze)
