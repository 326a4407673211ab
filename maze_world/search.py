import collections
import logging

logger = logging.getLogger(__name__)

DEPTH_FIRST = "DFS"
BREADTH_FIRST = "BFS"
ALGORITHMS = (DEPTH_FIRST, BREADTH_FIRST)

# Engine states
IDLE = "idle"
RUNNING = "running"
GOAL_FOUND = "goal-found" # reconstruction pending
DONE = "done"


class SearchError(RuntimeError):
    """A search or reconstruction was stepped in a state where it cannot advance."""


class PathReconstructor:
    """
    Walks a predecessor map backward from the goal, one vertex per call.

    self.path starts as [goal] and grows toward the start. Once the last vertex
    is the start the reconstructor is final and the path is the whole
    goal-to-start route.
    """
    def __init__(self, start, goal):
        self.start = start
        self.path = [goal]
        self.is_final = False

    def step(self, came_from):
        if self.is_final:
            return
        current = self.path[-1]
        if current == self.start:
            self.is_final = True
            return
        edge = came_from.get(current)
        if edge is None:
            raise SearchError(f"No predecessor recorded for {current}")
        self.path.append(edge.other(current))


class SearchEngine:
    """
    One incremental depth-first or breadth-first search over a maze.

    Search Semantics:
      - Frontier: a stack (DFS) or a FIFO queue (BFS) of vertices to expand.
      - visited: insertion-ordered dict of expanded vertices (expansion order).
      - came_from: vertex -> edge it was first discovered through. Later
        rediscoveries never overwrite it.

    The two strategies differ only in which end of the frontier advance() takes
    from. BFS therefore reconstructs a minimum-edge path; DFS makes no such
    promise.

    Lifecycle (self.state):
      idle -> running        arm()
      running -> goal-found  advance() pops the goal
      goal-found -> done     reconstruct_step() reaches the start

    Visualization policy:
      - advance() does exactly one pop per call. Popping an already visited
        vertex is a wasted step and is kept, it shows up in the animation.
    """
    def __init__(self, maze, algorithm=DEPTH_FIRST, start=None, goal=None):
        if algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm: {algorithm}")
        self.maze = maze
        self.algorithm = algorithm
        self.start = maze.start if start is None else start
        self.goal = maze.goal if goal is None else goal
        # Raises IndexError for endpoints outside the grid
        maze.grid_cells.vertex(*self.start)
        maze.grid_cells.vertex(*self.goal)
        self.state = IDLE
        self.frontier = self._new_frontier()
        self.visited = {}
        self.came_from = {}
        self.reconstructor = PathReconstructor(self.start, self.goal)

    def _new_frontier(self):
        if self.algorithm == BREADTH_FIRST:
            return collections.deque()
        return []

    def arm(self):
        self.frontier = self._new_frontier()
        self.frontier.append(self.start)
        self.visited = {}
        self.came_from = {}
        self.reconstructor = PathReconstructor(self.start, self.goal)
        self.state = RUNNING
        logger.debug("%s armed at %s, goal %s", self.algorithm, self.start, self.goal)

    @property
    def is_running(self):
        return self.state == RUNNING

    @property
    def is_reconstructing(self):
        return self.state == GOAL_FOUND

    @property
    def is_done(self):
        return self.state == DONE

    @property
    def path(self):
        return self.reconstructor.path

    @property
    def wrong_moves(self):
        """Expanded vertices that are not on the final path."""
        return max(0, len(self.visited) - len(self.path))

    def _pop(self):
        if self.algorithm == BREADTH_FIRST:
            return self.frontier.popleft()
        return self.frontier.pop()

    def advance(self):
        """Expands exactly one vertex from the frontier."""
        if self.state != RUNNING:
            raise SearchError(f"{self.algorithm} search is {self.state}, not running")
        if not self.frontier:
            raise SearchError(f"{self.algorithm} frontier exhausted before reaching {self.goal}")

        nxt = self._pop()
        if nxt in self.visited:
            return

        if nxt == self.goal:
            self.state = GOAL_FOUND
            logger.debug("%s reached goal after %d expansions", self.algorithm, len(self.visited))
        else:
            for edge in self.maze.incident_edges(nxt):
                neighbor = edge.other(nxt)
                self.frontier.append(neighbor)
                self.came_from.setdefault(neighbor, edge)

        self.visited[nxt] = None

    def reconstruct_step(self):
        if self.state != GOAL_FOUND:
            raise SearchError(f"{self.algorithm} search is {self.state}, nothing to reconstruct")
        self.reconstructor.step(self.came_from)
        if self.reconstructor.is_final:
            self.state = DONE

    def run(self, max_steps=None):
        """Drives the search and its reconstruction to completion. Returns the step count."""
        if self.state == IDLE:
            self.arm()
        steps = 0
        while self.state != DONE:
            if max_steps is not None and steps >= max_steps:
                break
            if self.state == RUNNING:
                self.advance()
            else:
                self.reconstruct_step()
            steps += 1
        return steps


def new_search_state(maze, algorithm, armed=True, start=None, goal=None):
    engine = SearchEngine(maze, algorithm, start, goal)
    if armed:
        engine.arm()
    return engine
