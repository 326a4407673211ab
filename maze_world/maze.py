import random
import collections
import logging

logger = logging.getLogger(__name__)

# --- Configuration ---
MAZE_WIDTH = 25 # Default maze size (cells)
MAZE_HEIGHT = 25
EDGE_WEIGHT_RANGE = 1000 # Kruskal weights are drawn from [0, EDGE_WEIGHT_RANGE)

# Direction letter -> (dx, dy, opposite). Origin (0, 0) is top-left.
DIRECTIONS = {
    'N': (0, -1, 'S'),
    'S': (0, 1, 'N'),
    'W': (-1, 0, 'E'),
    'E': (1, 0, 'W'),
}


class Edge:
    """
    An undirected passage between two grid-adjacent vertices.

    The weight only imposes a random order on the candidates during Kruskal's
    construction; traversal ignores it.
    """
    def __init__(self, source, destination, weight=0):
        self.source = source
        self.destination = destination
        self.weight = weight

    def has_vertex(self, v):
        return self.source == v or self.destination == v

    def other(self, v):
        """Returns the endpoint opposite to v."""
        if self.source == v:
            return self.destination
        if self.destination == v:
            return self.source
        raise ValueError(f"{v} is not an endpoint of {self!r}")

    def connects(self, a, b):
        return (self.source == a and self.destination == b) or \
               (self.source == b and self.destination == a)

    def __repr__(self):
        return f"Edge({self.source}, {self.destination}, weight={self.weight})"


class Grid:
    """
    The fixed set of cells of a maze.

    Vertices are plain (x, y) tuples so two vertices with equal coordinates are
    interchangeable. They are stored row-major: self.vertices[y][x] == (x, y).
    """
    def __init__(self, width, height):
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.vertices = [[(x, y) for x in range(width)] for y in range(height)]

    def __iter__(self):
        for row in self.vertices:
            yield from row

    def __len__(self):
        return self.width * self.height

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def vertex(self, x, y):
        if not self.in_bounds(x, y):
            raise IndexError(f"Vertex ({x}, {y}) is outside the {self.width}x{self.height} grid")
        return self.vertices[y][x]

    def adjacent_pairs(self):
        """
        Yields every pair of horizontally or vertically adjacent vertices once.

        Order is row-major, and for each cell the East neighbour comes before the
        South neighbour. Kruskal's tie-break relies on this order being stable.
        """
        for y in range(self.height):
            for x in range(self.width):
                u = (x, y)
                if x < self.width - 1:
                    yield u, (x + 1, y)
                if y < self.height - 1:
                    yield u, (x, y + 1)


class UnionFind:
    """
    Disjoint-set forest over the vertices of a grid.

    Purpose:
      - Tells Kruskal's algorithm whether a candidate edge joins two different
        trees (accept) or two cells of the same tree (reject, it would close a cycle)

    Union policy:
      - If a is still its own representative it is pointed straight at b;
        otherwise the root of a's set is pointed at the root of b's set.
      - This is not union-by-rank. It only shapes the internal trees, the
        connectivity answers are the same.

    Integration:
      - Created fresh for every maze by Maze.kruskals()
      - tree_count() is the loop condition of the construction
    """
    def __init__(self, vertices):
        self.representatives = {v: v for v in vertices}
        self._trees = len(self.representatives)

    def find(self, v):
        root = v
        while self.representatives[root] != root:
            root = self.representatives[root]
        # Path compression
        while self.representatives[v] != root:
            self.representatives[v], v = root, self.representatives[v]
        return root

    def union(self, a, b):
        """Merges the sets of a and b. Both must currently be in different sets."""
        if self.representatives[a] == a:
            self.representatives[a] = b
        else:
            self.representatives[self.find(a)] = self.find(b)
        self._trees -= 1

    def connected(self, a, b):
        return self.find(a) == self.find(b)

    def tree_count(self):
        return self._trees

    def contains_cycle(self, start):
        """
        Follows representative links from start and reports whether a vertex is
        seen twice before reaching a root. A correctly used forest never cycles.
        """
        seen = {start}
        current = start
        while self.representatives[current] != current:
            current = self.representatives[current]
            if current in seen:
                return True
            seen.add(current)
        return False


class Maze:
    """
    A perfect maze: a spanning tree over the cells of a Grid, built with
    Kruskal's algorithm on randomly weighted grid edges.

    Maze Representation:
      - self.edges lists the accepted tree edges in the order Kruskal took them.
      - self.grid is a defaultdict(set) where each cell (x, y) maps to the open
        directions {'N', 'S', 'E', 'W'} (knocked-down walls).
      - self._incident maps each cell to the edges touching it, in self.edges order.

    The search start is the top-left cell and the goal is the bottom-right cell.
    """
    def __init__(self, width=MAZE_WIDTH, height=MAZE_HEIGHT, rand=None):
        self._setup(width, height, rand if rand is not None else random.Random())
        self.union_find = UnionFind(self.grid_cells)

        for edge in self.kruskals():
            self._carve(edge)
        logger.debug("Generated %dx%d maze with %d edges", width, height, len(self.edges))

    def _setup(self, width, height, rand):
        # Fields shared by random and fixed-edge mazes
        self.rand = rand
        self.grid_cells = Grid(width, height)
        self.width = width
        self.height = height
        self.grid = collections.defaultdict(set)
        self._incident = collections.defaultdict(list)
        self.edges = []
        self.union_find = None

    @classmethod
    def from_edges(cls, width, height, pairs):
        """Builds a maze with a fixed edge set instead of a random one."""
        maze = cls.__new__(cls)
        maze._setup(width, height, None)
        for a, b in pairs:
            if not (maze.grid_cells.in_bounds(*a) and maze.grid_cells.in_bounds(*b)):
                raise IndexError(f"Edge {a}-{b} leaves the {width}x{height} grid")
            if abs(a[0] - b[0]) + abs(a[1] - b[1]) != 1:
                raise ValueError(f"Edge {a}-{b} does not join grid-adjacent cells")
            maze._carve(Edge(a, b))
        return maze

    @property
    def start(self):
        return (0, 0)

    @property
    def goal(self):
        return (self.width - 1, self.height - 1)

    def generate_worklist(self):
        """All candidate edges with random weights, sorted by ascending weight.

        list.sort is stable, so equal weights keep adjacent_pairs() order.
        """
        worklist = [Edge(u, v, self.rand.randrange(EDGE_WEIGHT_RANGE))
                    for u, v in self.grid_cells.adjacent_pairs()]
        worklist.sort(key=lambda e: e.weight)
        return worklist

    def kruskals(self):
        """
        Generates the spanning tree with Kruskal's Minimum Spanning Tree algorithm.

        Algorithm:
          1. Build every candidate edge between adjacent cells with a random weight
          2. Sort candidates by weight (ascending, stable)
          3. Take the cheapest remaining candidate:
             a. endpoints already in the same tree -> discard it (cycle)
             b. otherwise keep it and union the two trees
          4. Stop once a single tree remains

        Degenerate grids (0 or 1 cells wide) start with at most one tree or run
        out of candidates, so the loop always terminates.

        Returns:
          list: the accepted edges, width * height - 1 of them for a non-empty grid
        """
        worklist = self.generate_worklist()
        uf = self.union_find
        edges_in_tree = []
        i = 0
        while uf.tree_count() > 1 and i < len(worklist):
            cheapest = worklist[i]
            i += 1
            if uf.find(cheapest.source) == uf.find(cheapest.destination):
                continue
            edges_in_tree.append(cheapest)
            uf.union(cheapest.source, cheapest.destination)
        return edges_in_tree

    def _carve(self, edge):
        # Knock down the wall on both sides of the edge
        (x1, y1), (x2, y2) = edge.source, edge.destination
        for direction, (dx, dy, opposite) in DIRECTIONS.items():
            if (x1 + dx, y1 + dy) == (x2, y2):
                self.grid[edge.source].add(direction)
                self.grid[edge.destination].add(opposite)
                break
        self.edges.append(edge)
        self._incident[edge.source].append(edge)
        self._incident[edge.destination].append(edge)

    def incident_edges(self, v):
        return list(self._incident.get(v, ()))

    def edge_between(self, a, b):
        """Returns the maze edge joining a and b, or None if a wall separates them."""
        for edge in self._incident.get(a, ()):
            if edge.connects(a, b):
                return edge
        return None

    def get_valid_moves(self, x, y):
        return self.grid.get((x, y), set())

    def get_neighbors(self, x, y):
        neighbors = []
        for move in self.get_valid_moves(x, y):
            dx, dy, _ = DIRECTIONS[move]
            neighbors.append((x + dx, y + dy))
        return neighbors

    def is_connected(self):
        """True when every cell is reachable from the start through maze edges."""
        if not len(self.grid_cells):
            return True
        seen = {self.start}
        queue = collections.deque([self.start])
        while queue:
            x, y = queue.popleft()
            for n in self.get_neighbors(x, y):
                if n not in seen:
                    seen.add(n)
                    queue.append(n)
        return len(seen) == len(self.grid_cells)

    def is_perfect(self):
        """Connected with exactly one edge fewer than cells, i.e. a spanning tree."""
        cells = len(self.grid_cells)
        return self.is_connected() and len(self.edges) == max(0, cells - 1)


def new_maze_state(width=MAZE_WIDTH, height=MAZE_HEIGHT, seed=None, rand=None):
    """Factory for a freshly generated maze; seed is ignored when rand is given."""
    if rand is None:
        rand = random.Random(seed)
    return Maze(width, height, rand)
