import sys
import os

sys.path.append(os.path.dirname(os.path.realpath(__file__)) + "/..")

import unittest
import io
from Calculator import CalcDebug, evaluate
from CalcVis import CalcVis
from Errors import MalformedExpression


class TestCalcVis(unittest.TestCase):
    def setUp(self) -> None:
        # Errors dump the trace to stdout
        sys.stdout = io.StringIO()
        return super().setUp()

    def tearDown(self) -> None:
        sys.stdout = sys.__stdout__
        return super().tearDown()

    def test_tree(self):
        debug = CalcDebug()
        evaluate("1+2", debug=debug)

        vis = CalcVis(filename="graph/test.dot")
        vis.tree(debug)
        source = vis.source()

        self.assertIn("n2:s -> n0:n", source)
        self.assertIn("n2:s -> n1:n", source)
        self.assertEqual(source.count("->"), 2)
        self.assertIn('label="+"', source)
        self.assertIn(CalcVis.root_color, source)

    def test_nested_tree(self):
        debug = CalcDebug()
        evaluate("(1+2)*(3-4)", debug=debug)

        vis = CalcVis()
        vis.tree(debug)
        source = vis.source()

        # Three operators, two edges each
        self.assertEqual(source.count("->"), 6)
        root = debug.root()
        self.assertEqual(root.label, "*")
        for child in root.children:
            self.assertIn(f"n{root.id}:s -> n{child}:n", source)

    def test_debug_labels(self):
        debug = CalcDebug()
        evaluate("6/3", debug=debug)

        vis = CalcVis(debug=True)
        vis.tree(debug)
        self.assertIn("{/|2.0}", vis.source())

    def test_unreduced(self):
        debug = CalcDebug()
        with self.assertRaises(MalformedExpression):
            evaluate("(1)(2)", debug=debug)

        vis = CalcVis()
        with self.assertRaises(Exception):
            vis.tree(debug)


if __name__ == "__main__":
    unittest.main()
