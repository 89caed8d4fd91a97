from graphviz import Digraph
from Calculator import CalcDebug


class CalcVis:
    g: Digraph
    debug: bool

    left_edge_color = "#D2691E"
    right_edge_color = "#00BFFF"
    root_color = "#40E0D0"
    value_color = "#FF69B4"

    def __init__(self, filename: str = "graph/out.dot",
                 debug: bool = False) -> None:
        self._graph = Digraph('structs', filename=filename,
                              node_attr={'shape': 'record'})
        self.debug = debug

    @staticmethod
    def dot_name(node: CalcDebug.Node) -> str:
        return f"n{node.id}"

    @staticmethod
    def _escape(s: str) -> str:
        # Characters with a meaning inside record labels
        for c in "\\{}|<>":
            s = s.replace(c, "\\" + c)
        return s

    def dot_label(self, node: CalcDebug.Node) -> str:
        if node.is_leaf():
            return self._escape(node.label)
        # In debug mode the intermediate value is shown as well
        if self.debug:
            return f"{{{self._escape(node.label)}|{node.value}}}"
        return self._escape(node.label)

    def _edge_left(self, src: CalcDebug.Node, dst: CalcDebug.Node) -> None:
        self._graph.edge(self.dot_name(src) + ":s", self.dot_name(dst) + ":n",
                         color=CalcVis.left_edge_color)

    def _edge_right(self, src: CalcDebug.Node, dst: CalcDebug.Node) -> None:
        self._graph.edge(self.dot_name(src) + ":s", self.dot_name(dst) + ":n",
                         color=CalcVis.right_edge_color)

    def _node(self, node: CalcDebug.Node, root: bool = False) -> None:
        if root:
            self._graph.node(self.dot_name(node), self.dot_label(node),
                             color=CalcVis.root_color,
                             xlabel=str(node.value),
                             fontcolor=CalcVis.value_color)
        else:
            self._graph.node(self.dot_name(node), self.dot_label(node))

    def tree(self, debug: CalcDebug) -> None:
        root = debug.root()
        if root is None:
            raise Exception("Cannot draw an evaluation that did not reduce "
                            "to a single value")

        # Only nodes reachable from the root, left operand drawn first
        stack = [root]
        while stack:
            node = stack.pop()
            self._node(node, root=node is root)
            if node.is_leaf():
                continue
            left, right = (debug.nodes[i] for i in node.children)
            self._edge_left(node, left)
            self._edge_right(node, right)
            stack.append(right)
            stack.append(left)

    def source(self) -> str:
        return self._graph.source

    def render(self):
        self._graph.render()
