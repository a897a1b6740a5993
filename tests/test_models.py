import unittest

from jsonmend.models import KeywordMode, RepairOptions


class KeywordModeParseTest(unittest.TestCase):
    def test_parse_aliases(self):
        self.assertEqual(KeywordMode.parse(None), KeywordMode.FIRST_LETTER)
        self.assertEqual(KeywordMode.parse("first_letter"), KeywordMode.FIRST_LETTER)
        self.assertEqual(KeywordMode.parse(" Prefix "), KeywordMode.PREFIX)
        self.assertEqual(KeywordMode.parse("strict"), KeywordMode.PREFIX)

    def test_parse_rejects_unknown(self):
        with self.assertRaises(ValueError):
            KeywordMode.parse("fuzzy")


class RepairOptionsFromEnvTest(unittest.TestCase):
    def test_defaults_without_env(self):
        self.assertEqual(RepairOptions.from_env({}), RepairOptions())

    def test_reads_flags(self):
        options = RepairOptions.from_env(
            {
                "JSONMEND_KEYWORD_MODE": "prefix",
                "JSONMEND_KEEP_STRING_NEWLINES": "yes",
                "JSONMEND_WRAP_BARE_MEMBERS": "1",
            }
        )
        self.assertEqual(options.keyword_mode, KeywordMode.PREFIX)
        self.assertTrue(options.keep_string_newlines)
        self.assertTrue(options.wrap_bare_members)

    def test_invalid_flag_raises(self):
        with self.assertRaises(ValueError):
            RepairOptions.from_env({"JSONMEND_WRAP_BARE_MEMBERS": "maybe"})


if __name__ == "__main__":
    unittest.main()
