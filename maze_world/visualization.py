from graphviz import Digraph, Graph


def _name(v):
    return str(v)


def search_tree_graph(engine):
    """Predecessor tree of a search as parent -> child edges. Path cells are bold."""
    dot = Digraph(name=f"{engine.algorithm.lower()}_tree")
    on_path = set(engine.path) if engine.is_done else set()
    for vertex, edge in engine.came_from.items():
        if vertex == engine.start:
            continue
        parent = edge.other(vertex)
        for node in (parent, vertex):
            dot.node(_name(node), style="bold" if node in on_path else "solid")
        dot.edge(_name(parent), _name(vertex))
    return dot


def maze_graph(maze):
    """The maze's spanning tree as an undirected graph, laid out on the grid."""
    dot = Graph(name="maze", engine="neato")
    for (x, y) in maze.grid_cells:
        dot.node(_name((x, y)), pos=f"{x},{-y}!", shape="point")
    for edge in maze.edges:
        dot.edge(_name(edge.source), _name(edge.destination))
    return dot


def render_search_tree(engine, filename, view=False):
    """Writes the predecessor tree to filename (+ .png). Needs the graphviz binaries."""
    dot = search_tree_graph(engine)
    dot.format = "png"
    return dot.render(filename, view=view)
