import json
import random
import unittest
from JsonRepairPy import JsonRepairReader, JsonRepairOptions, JsonRepairResult, JsonRepairError, JsonRepairErrorKind, repair

def repaired(text: str, **options) -> str:
    return JsonRepairReader.repair_from_string(text, JsonRepairOptions(**options))

# Characters that trip quote, delimiter and path heuristics when they appear inside strings.
STRING_ALPHABET: str = "ab ,:=\"'\\/{}[]()+#*.-\n\t`\u201c\u201d\u2018\u2019\u00e9"

def random_string(rng: random.Random) -> str:
    return "".join(rng.choice(STRING_ALPHABET) for _ in range(rng.randrange(10)))

def random_value(rng: random.Random, depth: int = 0):
    kind: int = rng.randrange(7 if depth < 4 else 5)
    if kind == 0:
        return None
    if kind == 1:
        return rng.random() < 0.5
    if kind == 2:
        return rng.choice([rng.randint(-10**6, 10**6), rng.uniform(-1e6, 1e6)])
    if kind in (3, 4):
        return random_string(rng)
    if kind == 5:
        return [random_value(rng, depth + 1) for _ in range(rng.randrange(4))]
    return {random_string(rng): random_value(rng, depth + 1) for _ in range(rng.randrange(4))}

class JsonRepairPyTests(unittest.TestCase):
    #
    # Scenario Tests
    #

    def test_TrailingCommaTest(self):
        self.assertEqual(repaired('{"a":1,}'), '{"a":1}')

    def test_UnquotedKeyTest(self):
        self.assertEqual(repaired("{a:1}"), '{"a":1}')

    def test_SingleQuotesTest(self):
        self.assertEqual(repaired("{'a':'b'}"), '{"a":"b"}')

    def test_MissingCommaTest(self):
        output: str = repaired('{"a":1 "b":2}')

        self.assertEqual(output, '{"a":1, "b":2}')
        self.assertEqual(json.loads(output), {"a": 1, "b": 2})

    def test_LeadingCommentTest(self):
        self.assertEqual(repaired('// comment\n{"a":1}'), '{"a":1}')

    def test_ExtendedConstructorTest(self):
        self.assertEqual(repaired("ObjectId(abc123)"), '"ObjectId"("abc123")')

    def test_EmptyInputTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair("")

        self.assertTrue(result.is_error)
        self.assertEqual(result.error().kind, JsonRepairErrorKind.UNEXPECTED_END)
        self.assertEqual(result.error().position, 0)

    #
    # Object Tests
    #

    def test_MissingClosingBracketsTest(self):
        self.assertEqual(repaired('{"a": [1, 2'), '{"a": [1, 2]}')

    def test_TruncatedValueTest(self):
        self.assertEqual(repaired('{"a":'), '{"a":null}')
        self.assertEqual(repaired('{"a"'), '{"a":null}')

    def test_BracelessObjectTest(self):
        self.assertEqual(json.loads(repaired("a: 1, b: 2")), {"a": 1, "b": 2})
        self.assertEqual(json.loads(repaired('name = "x"')), {"name": "x"})

    def test_MissingOpeningQuoteTest(self):
        self.assertEqual(repaired('{"a": b"}'), '{"a": "b"}')

    def test_UndefinedTest(self):
        self.assertEqual(repaired('{"a": undefined}'), '{"a": null}')

    def test_UrlValueTest(self):
        output: str = repaired('{"url": http://example.com/path}')

        self.assertEqual(json.loads(output), {"url": "http://example.com/path"})

    def test_CommentsBetweenMembersTest(self):
        output: str = repaired('{"a": 1 /* c */, "b": 2 // x\n}')

        self.assertEqual(json.loads(output), {"a": 1, "b": 2})

    def test_SpecialWhitespaceTest(self):
        self.assertEqual(repaired('{"a":\u00a01}'), '{"a": 1}')

    def test_NumericKeyStaysStringTest(self):
        self.assertEqual(repaired('{"1": "x"}'), '{"1": "x"}')

    def test_TrimWhitespaceTest(self):
        self.assertEqual(repaired('{" a ": " b "}', trim_whitespace=True), '{"a": "b"}')
        self.assertEqual(repaired('{" a ": " b "}'), '{" a ": " b "}')

    #
    # Array Tests
    #

    def test_PythonKeywordsTest(self):
        self.assertEqual(repaired("[True, False, None]"), "[true, false, null]")

    def test_KeywordBoundaryTest(self):
        self.assertEqual(repaired("[nullable]"), '["nullable"]')

    def test_BareWordsTest(self):
        self.assertEqual(repaired("[hello, world]"), '["hello", "world"]')

    def test_ExtraCommasTest(self):
        self.assertEqual(repaired("[1,,2]"), "[1,null,2]")
        self.assertEqual(repaired("[1,,]"), "[1]")
        self.assertEqual(repaired("[,1]"), "[null,1]")
        self.assertEqual(json.loads(repaired("[1, 2, ]")), [1, 2])

    def test_MissingArrayCommasTest(self):
        self.assertEqual(json.loads(repaired("[1 2 3]")), [1, 2, 3])

    def test_EllipsisTest(self):
        self.assertEqual(json.loads(repaired("[1, 2, ...]")), [1, 2])

    def test_ArrayClosedByObjectTest(self):
        self.assertEqual(repaired('{"a": [1, 2}'), '{"a": [1, 2]}')
        self.assertEqual(json.loads(repaired('{"a": [1, 2, "b": 3}')), {"a": [1, 2], "b": 3})

    #
    # String Tests
    #

    def test_SmartQuotesTest(self):
        self.assertEqual(repaired("{\u201ca\u201d: \u201cb\u201d}"), '{"a": "b"}')
        self.assertEqual(repaired("{`a`: 1}"), '{"a": 1}')

    def test_UnterminatedStringTest(self):
        self.assertEqual(repaired('["abc'), '["abc"]')
        self.assertEqual(repaired('{"a": "abc}'), '{"a": "abc"}')

    def test_MissingEndQuoteBeforeKeyTest(self):
        self.assertEqual(repaired('{"a": "x, "b": 2}'), '{"a": "x", "b": 2}')

    def test_ApostropheInsideStringTest(self):
        self.assertEqual(repaired('{"msg": "it\'s ok"}'), '{"msg": "it\'s ok"}')
        self.assertEqual(repaired('"it\\\'s"'), '"it\'s"')

    def test_ConcatenationTest(self):
        self.assertEqual(repaired('{"a": "hello " + "world"}'), '{"a": "hello world"}')

    def test_LongConcatenationTest(self):
        output: str = repaired("+".join(['"a"'] * 1200))

        self.assertEqual(output, '"' + "a" * 1200 + '"')

    def test_SmartQuoteInsideStringTest(self):
        self.assertEqual(repaired('["b\u201cc"'), '["b\u201cc"]')

    def test_InvalidEscapeTest(self):
        self.assertEqual(json.loads(repaired('"a\\qb"')), "a\\qb")
        self.assertEqual(json.loads(repaired('"\\u12"')), "\\u12")

    def test_ControlCharacterTest(self):
        self.assertEqual(repaired('"a\tb"'), '"a\\tb"')

    def test_NumericStringTest(self):
        self.assertEqual(repaired('{"a": "42",}'), '{"a": 42}')
        self.assertEqual(repaired('{"zip": "00501",}'), '{"zip": "00501"}')
        self.assertEqual(repaired('{"a": "42"}'), '{"a": "42"}')

    def test_FilePathTest(self):
        output: str = repaired('{"p": "C:\\Users\\me\\file.txt"}')

        self.assertEqual(json.loads(output), {"p": "C:\\Users\\me\\file.txt"})
        self.assertEqual(repaired(output), output)

    def test_RegexTest(self):
        self.assertEqual(repaired('{"re": /ab+c/i}'), '{"re": "/ab+c/i"}')
        self.assertEqual(json.loads(repaired("[/\\d+/]")), ["/\\d+/"])

    #
    # Number Tests
    #

    def test_NumberRepairTest(self):
        self.assertEqual(repaired("[+1]"), "[1]")
        self.assertEqual(repaired("[1.]"), "[1.0]")
        self.assertEqual(repaired("[-]"), "[-0]")
        self.assertEqual(repaired("[1e]"), "[1e0]")
        self.assertEqual(repaired("[2e+]"), "[2e+0]")
        self.assertEqual(repaired("[1e--5]"), "[1e-5]")
        self.assertEqual(repaired("[.5]"), "[0.5]")
        self.assertEqual(repaired("[-.5]"), "[-0.5]")

    def test_LeadingZeroTest(self):
        self.assertEqual(repaired("[007]"), '["007"]')

    #
    # Envelope Tests
    #

    def test_FunctionCallTest(self):
        self.assertEqual(repaired('callback({"a": 1});'), '{"a": 1}')
        self.assertEqual(repaired("fn()"), "null")
        self.assertEqual(repaired('NumberLong("5")'), "5")

    def test_ConstructorCallTest(self):
        self.assertEqual(repaired("ISODate(2020-01-01)"), '"ISODate"("2020-01-01")')

    def test_MarkdownFenceTest(self):
        self.assertEqual(repaired('```json\n{"a": 1}\n```'), '{"a": 1}')

    def test_TrailingGarbageTest(self):
        self.assertEqual(repaired('{"a":1} xyz'), '{"a":1}')

    def test_NewlineDelimitedTest(self):
        self.assertEqual(repaired('{"a":1}\n{"b":2}\n', newline_delimited=True), '{"a":1}\n{"b":2}')
        self.assertEqual(repaired('{a:1}\n[1,2', newline_delimited=True), '{"a":1}\n[1,2]')
        self.assertEqual(repaired('{"a":1\n{"b":2}', newline_delimited=True), '{"a":1}\n{"b":2}')

    #
    # Error Tests
    #

    def test_ColonExpectedTest(self):
        with self.assertRaises(JsonRepairError) as context:
            repaired('{"a" }')

        self.assertEqual(context.exception.kind, JsonRepairErrorKind.COLON_EXPECTED)
        self.assertEqual(context.exception.position, 5)
        self.assertEqual(str(context.exception), "Colon expected at position 5")

    def test_ObjectKeyExpectedTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair('{"a":1,:2}')

        self.assertTrue(result.is_error)
        self.assertEqual(result.error().kind, JsonRepairErrorKind.OBJECT_KEY_EXPECTED)
        self.assertEqual(result.error().position, 7)

    def test_UnexpectedCharacterTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair("]")

        self.assertEqual(result.error().kind, JsonRepairErrorKind.UNEXPECTED_CHARACTER)
        self.assertEqual(result.error().position, 0)

    def test_WhitespaceOnlyTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair("   ")

        self.assertEqual(result.error().kind, JsonRepairErrorKind.UNEXPECTED_END)
        self.assertEqual(result.error().position, 3)

    def test_InvalidCharacterTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair("\x01")

        self.assertEqual(result.error().kind, JsonRepairErrorKind.INVALID_CHARACTER)
        self.assertEqual(result.error().position, 0)

    def test_InvalidUnicodeTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair('["\ud800"]')

        self.assertEqual(result.error().kind, JsonRepairErrorKind.INVALID_UNICODE)
        self.assertEqual(result.error().position, 2)

    def test_NestingTooDeepTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair("[" * 500)

        self.assertEqual(result.error().kind, JsonRepairErrorKind.NESTING_TOO_DEEP)
        self.assertEqual(json.loads(repaired("[" * 150 + "]" * 150)), json.loads("[" * 150 + "]" * 150))

    def test_MaxDepthOptionTest(self):
        self.assertEqual(repaired("[1]", max_depth=2), "[1]")
        with self.assertRaises(JsonRepairError):
            repaired("[[1]]", max_depth=2)
        with self.assertRaises(ValueError):
            JsonRepairOptions(max_depth=0)

    def test_ResultTest(self):
        result: JsonRepairResult[str, JsonRepairError] = repair("{a:1}")

        self.assertFalse(result.is_error)
        self.assertTrue(result)
        self.assertFalse(repair(""))
        self.assertEqual(result.value(), '{"a":1}')
        with self.assertRaises(RuntimeError):
            result.error()

    #
    # Round Trip Tests
    #

    def test_ValidJsonIdempotenceTest(self):
        documents: list[str] = [
            "{}",
            "[]",
            '{"name": "Alice", "tags": ["a", "b"], "n": null, "ok": true, "f": -1.5e3}',
            '"text with, comma"',
            '{"a": {"b": [1, {"c": "d"}]}}',
            '{"s": "quote \\" inside"}',
            '{"unicode": "\\u00e9t\\u00e9"}',
            '{"e": ""}',
            '{"a,\\\\": 5, "b": 5}',
            '{"a": "b\u201cc"}',
            '{"a": "/to\':q"}',
            '"VPY\u201cjy#x"',
        ]
        for document in documents:
            with self.subTest(document=document):
                self.assertEqual(json.loads(repaired(document)), json.loads(document))

    def test_ValidJsonUnchangedTest(self):
        self.assertEqual(repaired('  {"a": 1}  '), '{"a": 1}')
        self.assertEqual(repaired('{"a": "b\u201cc"}'), '{"a": "b\u201cc"}')

    def test_SerializedValueRoundTripTest(self):
        value = {"k": [1, 2.5, "x y", None, True, {"z": "w"}], "u": "caf\u00e9"}

        self.assertEqual(json.loads(repaired(json.dumps(value))), value)
        self.assertEqual(json.loads(repaired(json.dumps(value, indent=4, ensure_ascii=False))), value)

    def test_RandomValueRoundTripTest(self):
        rng: random.Random = random.Random(1234)
        for _ in range(500):
            value = random_value(rng)
            for ensure_ascii in (True, False):
                text: str = json.dumps(value, ensure_ascii=ensure_ascii)
                with self.subTest(text=text):
                    self.assertEqual(json.loads(repaired(text)), value)

if __name__ == "__main__":
    unittest.main()
