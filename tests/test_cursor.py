"""
Tests for the character cursor.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from pyscanner.lexer.cursor import Cursor
from pyscanner.lexer.tokens import SourceLocation


class TestCursor(unittest.TestCase):
    """Test cases for position tracking and lookahead."""

    def test_advance_tracks_line_and_column(self):
        cursor = Cursor("ab\nc")
        self.assertEqual(cursor.position(), (1, 1))
        self.assertEqual(cursor.advance(), "a")
        self.assertEqual(cursor.position(), (1, 2))
        self.assertEqual(cursor.advance(), "b")
        self.assertEqual(cursor.advance(), "\n")
        self.assertEqual(cursor.position(), (2, 1))
        self.assertEqual(cursor.advance(), "c")
        self.assertEqual(cursor.position(), (2, 2))

    def test_exhaustion_is_not_an_error(self):
        cursor = Cursor("x")
        cursor.advance()
        self.assertTrue(cursor.exhausted())
        for _ in range(3):
            self.assertIsNone(cursor.peek())
            self.assertIsNone(cursor.advance())
        self.assertEqual(cursor.position(), (1, 2))

    def test_peek_does_not_consume(self):
        cursor = Cursor("xy")
        self.assertEqual(cursor.peek(), "x")
        self.assertEqual(cursor.peek(1), "y")
        self.assertIsNone(cursor.peek(2))
        self.assertEqual(cursor.position(), (1, 1))

    def test_consume_if(self):
        cursor = Cursor("x1")
        self.assertIsNone(cursor.consume_if(str.isdigit))
        self.assertEqual(cursor.position(), (1, 1))
        self.assertEqual(cursor.consume_if(str.isalpha), "x")
        self.assertEqual(cursor.consume_if(str.isdigit), "1")
        self.assertIsNone(cursor.consume_if(lambda c: True))

    def test_duplicate_is_independent(self):
        cursor = Cursor("'''")
        cursor.advance()
        probe = cursor.duplicate()
        probe.advance()
        probe.advance()
        self.assertTrue(probe.exhausted())
        self.assertEqual(cursor.position(), (1, 2))
        self.assertEqual(cursor.peek(), "'")

    def test_line_start_and_location(self):
        cursor = Cursor("a\nb", filename="demo.py")
        self.assertTrue(cursor.at_line_start())
        cursor.advance()
        self.assertFalse(cursor.at_line_start())
        cursor.advance()
        self.assertTrue(cursor.at_line_start())
        self.assertEqual(cursor.location(), SourceLocation("demo.py", 2, 1, 2))
        self.assertEqual(cursor.offset, 2)


if __name__ == "__main__":
    unittest.main(verbosity=2)
