import re
import unittest
from pipesh.commands import Grep
from pipesh.errors import CommandExecutionError
from pipesh.grep import (
    LINE_SEPARATOR, GrepErrorKind, GrepOptions, GrepUsageError,
    compile_pattern, filter_lines, parse_grep_args,
)

from helpers import make_context

SEP = LINE_SEPARATOR
FILE4 = "1\n2\n3\nkek find me lol\nkeeeeek\nfinder\n"


class TestParseGrepArgs(unittest.TestCase):
    def test_pattern_only(self):
        self.assertEqual(parse_grep_args(["a"]), GrepOptions("a"))

    def test_all_flags(self):
        self.assertEqual(
            parse_grep_args(["-w", "-A", "1", "find", "file4"]),
            GrepOptions("find", ["file4"], whole_word=True, after_context=1),
        )

    def test_clustered_flags_and_attached_count(self):
        self.assertEqual(
            parse_grep_args(["-iwA2", "x"]),
            GrepOptions("x", ignore_case=True, whole_word=True, after_context=2),
        )
        self.assertEqual(parse_grep_args(["-A3", "x"]).after_context, 3)

    def test_long_options(self):
        self.assertEqual(
            parse_grep_args(["--ignore-case", "--word-regexp", "--after-context=4", "x"]),
            GrepOptions("x", ignore_case=True, whole_word=True, after_context=4),
        )
        self.assertEqual(parse_grep_args(["--after-context", "5", "x"]).after_context, 5)

    def test_options_after_positionals(self):
        self.assertEqual(
            parse_grep_args(["x", "f1", "-i", "f2"]),
            GrepOptions("x", ["f1", "f2"], ignore_case=True),
        )

    def test_double_dash_ends_options(self):
        self.assertEqual(parse_grep_args(["--", "-i", "-A"]), GrepOptions("-i", ["-A"]))

    def test_zero_context(self):
        self.assertEqual(parse_grep_args(["-A", "0", "x"]).after_context, 0)

    def test_negative_count(self):
        error = parse_grep_args(["-A", "-10", "find", "file4"])
        self.assertEqual(error, GrepUsageError(GrepErrorKind.NEGATIVE_COUNT, "-10"))
        self.assertEqual(str(error), "-A argument < 0: -10")

    def test_invalid_number(self):
        error = parse_grep_args(["-A", "find", "file4"])
        self.assertEqual(error, GrepUsageError(GrepErrorKind.INVALID_NUMBER, "find"))
        self.assertEqual(
            parse_grep_args(["--after-context=lots", "x"]),
            GrepUsageError(GrepErrorKind.INVALID_NUMBER, "lots"),
        )

    def test_unknown_flag(self):
        error = parse_grep_args(["-q", "find"])
        self.assertEqual(error, GrepUsageError(GrepErrorKind.UNKNOWN_FLAG, "q"))
        self.assertEqual(str(error), "invalid option -- 'q'")
        self.assertEqual(
            parse_grep_args(["--quiet", "x"]),
            GrepUsageError(GrepErrorKind.UNKNOWN_FLAG, "--quiet"),
        )

    def test_missing_count(self):
        self.assertEqual(parse_grep_args(["x", "-A"]), GrepUsageError(GrepErrorKind.MISSING_ARGUMENT, "A"))

    def test_missing_long_count(self):
        error = parse_grep_args(["x", "--after-context"])
        self.assertEqual(error, GrepUsageError(GrepErrorKind.MISSING_ARGUMENT, "after-context"))
        self.assertEqual(str(error), "option requires an argument -- 'after-context'")

    def test_missing_pattern(self):
        self.assertEqual(parse_grep_args([]).kind, GrepErrorKind.MISSING_PATTERN)
        self.assertEqual(parse_grep_args(["-i"]).kind, GrepErrorKind.MISSING_PATTERN)


class TestCompilePattern(unittest.TestCase):
    def test_case_sensitive_by_default(self):
        regex = compile_pattern(GrepOptions("a"))
        self.assertIsNone(regex.search("A"))

    def test_ignore_case(self):
        regex = compile_pattern(GrepOptions("a", ignore_case=True))
        self.assertIsNotNone(regex.search("A"))

    def test_whole_word(self):
        regex = compile_pattern(GrepOptions("find", whole_word=True))
        self.assertIsNotNone(regex.search("kek find me"))
        self.assertIsNone(regex.search("finder"))

    def test_whole_word_wraps_alternation(self):
        regex = compile_pattern(GrepOptions("ab|cd", whole_word=True))
        self.assertIsNone(regex.search("abc"))
        self.assertIsNone(regex.search("xcd"))
        self.assertIsNotNone(regex.search("x cd"))

    def test_invalid_regex(self):
        with self.assertRaises(re.error):
            compile_pattern(GrepOptions("("))


class TestFilterLines(unittest.TestCase):
    def test_matches_only(self):
        regex = re.compile("a")
        self.assertEqual(filter_lines("a\nb\na\nc\nd", regex), "a" + SEP + "a" + SEP)

    def test_no_match(self):
        self.assertEqual(filter_lines("x\ny", re.compile("z"), 3), "")

    def test_after_context(self):
        regex = re.compile("a")
        self.assertEqual(
            filter_lines("a\nb\na\nc\nd", regex, 1),
            SEP.join(["a", "b", "a", "c"]) + SEP,
        )

    def test_match_resets_counter(self):
        regex = re.compile("m")
        self.assertEqual(
            filter_lines("m\nx\nm\ny\nz\nw", regex, 2),
            SEP.join(["m", "x", "m", "y", "z"]) + SEP,
        )

    def test_trailing_empty_segment_is_a_line(self):
        self.assertEqual(filter_lines("a\n", re.compile("a"), 1), "a" + SEP + SEP)

    def test_context_lines_follow_a_match(self):
        text = "\n".join(["hit", "1", "2", "3", "hit", "4", "5", "6", "7"])
        regex = re.compile("hit")
        for n in range(4):
            emitted = filter_lines(text, regex, n).split(SEP)[:-1]
            self.assertEqual(emitted.count("hit"), 2)
            # each block is a match followed by at most n other lines
            block = 0
            for line in emitted:
                block = 0 if line == "hit" else block + 1
                self.assertLessEqual(block, n)


class TestGrepCommand(unittest.TestCase):
    def setUp(self):
        self.context, self.diagnostics = make_context({"file4": FILE4, "other": "find\nnext"})

    def test_grep_input(self):
        self.assertEqual(Grep(["1"]).execute("1"), "1" + SEP)

    def test_grep_ignore_case(self):
        self.assertEqual(Grep(["-i", "a"]).execute("A"), "A" + SEP)

    def test_grep_file_ignores_input(self):
        self.assertEqual(Grep(["2", "file4"], self.context).execute("1"), "2" + SEP)

    def test_grep_whole_word(self):
        self.assertEqual(
            Grep(["-w", "find", "file4"], self.context).execute(""),
            "kek find me lol" + SEP,
        )

    def test_grep_after_context(self):
        self.assertEqual(
            Grep(["-w", "-A", "1", "find", "file4"], self.context).execute(""),
            "kek find me lol" + SEP + "keeeeek" + SEP,
        )

    def test_grep_files_processed_independently(self):
        context, _ = make_context({"a": "m", "b": "x\ny"})
        self.assertEqual(Grep(["-A", "1", "m", "a", "b"], context).execute(""), "m" + SEP)

    def test_grep_several_files(self):
        self.assertEqual(
            Grep(["-w", "find", "file4", "other"], self.context).execute(""),
            "kek find me lol" + SEP + "find" + SEP,
        )

    def test_grep_skips_missing_file(self):
        output = Grep(["find", "missing", "other"], self.context).execute("")
        self.assertEqual(output, "find" + SEP)
        self.assertEqual(self.diagnostics, ["grep: missing: No such file or directory"])

    def test_negative_count_fails_before_reading(self):
        with self.assertRaises(CommandExecutionError) as cm:
            Grep(["-A", "-10", "find", "file4"], self.context).execute("")
        self.assertEqual(str(cm.exception), "grep: -A argument < 0: -10")
        self.assertEqual(self.context.filesystem.reads, [])

    def test_non_numeric_count(self):
        with self.assertRaises(CommandExecutionError):
            Grep(["-A", "find", "file4"], self.context).execute("")
        self.assertEqual(self.context.filesystem.reads, [])

    def test_unknown_flag(self):
        with self.assertRaises(CommandExecutionError):
            Grep(["-q", "find", "file4"], self.context).execute("")

    def test_missing_pattern(self):
        with self.assertRaises(CommandExecutionError) as cm:
            Grep([]).execute("text")
        self.assertEqual(str(cm.exception), "grep: missing pattern")

    def test_invalid_pattern(self):
        with self.assertRaises(CommandExecutionError) as cm:
            Grep(["(", "file4"], self.context).execute("")
        self.assertTrue(str(cm.exception).startswith("grep: invalid pattern"))
        self.assertEqual(self.context.filesystem.reads, [])


if __name__ == '__main__':
    unittest.main()
