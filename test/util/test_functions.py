import unittest

from util.functions import join_lines, longest_run, split_lines


class FunctionsTest(unittest.TestCase):

    def test_longest_run_absent(self):
        self.assertEqual(longest_run("no ticks here", "`"), 0)
        self.assertEqual(longest_run("", "`"), 0)

    def test_longest_run_picks_the_longest(self):
        self.assertEqual(longest_run("a`b``c```d``", "`"), 3)
        self.assertEqual(longest_run("~~~~ and ~~", "~"), 4)

    def test_longest_run_escapes_regex_characters(self):
        self.assertEqual(longest_run("a..b...c", "."), 3)
        self.assertEqual(longest_run("**", "*"), 2)

    def test_split_lines_only_on_line_feed(self):
        self.assertEqual(split_lines("a\r\nb\rc"), ["a\r", "b\rc"])
        self.assertEqual(split_lines("a\n"), ["a", ""])
        self.assertEqual(split_lines(""), [""])

    def test_join_lines_reverses_split(self):
        text = "one\n\n\ntwo\n"
        self.assertEqual(join_lines(split_lines(text)), text)
