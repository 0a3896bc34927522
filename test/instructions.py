"""
Tokenizer and settling behavioral tests.

Scope
- Validate tokenizing: skipped entries, leading group, long/short flags, data routing.
- Validate default inference under the typed and eager policies.
- Validate hoisting and pruning, and the faults they record.

Conventions
- Test method names follow CamelCase per project convention.
- Argument vectors always carry the two leading entries ("prog", "script").
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from haggis import (
    Config,
    Instruction,
    Policy,
    Schema,
    tokenize,
    settle,
    AmbiguousShorthandWarning,
    UnresolvedShorthandWarning,
    ValuelessSwitchWarning,
    FaultCode,
)

TEMPLATE = {
    "count": 10,
    "exclude": False,
    "source": [],
    "destination": "",
    "verbose": False,
    "quiet": False,
}


def argv(*tokens):
    return ["prog", "script", *tokens]


class TestInstruction(TestCase):
    """Behavioral tests for Instruction."""

    def testDefaults(self):
        instruction = Instruction(["source"])
        self.assertEqual(instruction.name, ["source"])
        self.assertEqual(instruction.data, [])
        self.assertIsNone(instruction.default)
        self.assertIsNone(instruction.token)
        self.assertTrue(instruction.leading)

    def testHoistFillsEmptyData(self):
        instruction = Instruction(["exclude"], default=True, token="--exclude", index=1)
        instruction.hoist()
        self.assertEqual(instruction.data, [True])
        self.assertIsNone(instruction.default)
        self.assertFalse(instruction.leading)

    def testHoistKeepsExplicitData(self):
        instruction = Instruction(["exclude"], [False], default=True, token="--exclude", index=1)
        instruction.hoist()
        self.assertEqual(instruction.data, [False])

    def testHoistWithoutDefaultIsNoop(self):
        instruction = Instruction(["count"], token="--count", index=1)
        instruction.hoist()
        self.assertEqual(instruction.data, [])

    def testDataIsACopy(self):
        instruction = Instruction(["source"], ["a"])
        instruction.data.append("b")
        self.assertEqual(instruction.data, ["a"])
        instruction.append("b")
        self.assertEqual(instruction.data, ["a", "b"])

    def testRepr(self):
        self.assertEqual(repr(Instruction(["a"], [1])), "instruction(name=['a'], data=[1], default=None)")


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def setUp(self):
        self.schema = Schema(TEMPLATE)
        self.config = Config()

    def tokenize(self, *tokens, config=None, faults=None):
        return tokenize(argv(*tokens), self.schema, config or self.config, faults if faults is not None else [])

    def testFirstTwoEntriesAreSkipped(self):
        instructions = tokenize(["-x", "--exclude"], self.schema, self.config)
        self.assertEqual(len(instructions), 1)
        self.assertEqual(instructions[0].name, ["positional"])
        self.assertEqual(instructions[0].data, [])

    def testLeadingValuesGoToInitial(self):
        instructions = self.tokenize("a", "2", "-s", "b", config=Config(initial="source"))
        self.assertEqual(instructions[0].name, ["source"])
        self.assertEqual(instructions[0].data, ["a", 2])
        self.assertEqual(instructions[1].data, ["b"])

    def testLongFlagIsVerbatim(self):
        instructions = self.tokenize("--src", "a")
        self.assertEqual(instructions[1].name, ["src"])
        self.assertEqual(instructions[1].token, "--src")
        self.assertEqual(instructions[1].index, 1)

    def testShortClusterResolvesEachLetter(self):
        instructions = self.tokenize("-vq")
        self.assertEqual(instructions[1].name, ["verbose", "quiet"])

    def testUnmatchedLetterNamesItself(self):
        faults = []
        instructions = self.tokenize("-x", faults=faults)
        self.assertEqual(instructions[1].name, ["x"])
        self.assertEqual(len(faults), 1)
        self.assertIsInstance(faults[0], UnresolvedShorthandWarning)
        self.assertIs(faults[0].code, FaultCode.UNRESOLVED_SHORTHAND)

    def testValuesAreCastAndRouted(self):
        instructions = self.tokenize("-c", "5", "-d", "/tmp", "true")
        self.assertEqual(instructions[1].data, [5])
        self.assertEqual(instructions[2].data, ["/tmp", True])

    def testBooleanLongFlagGetsDefault(self):
        instructions = self.tokenize("--exclude", "--count", "--unknown")
        self.assertTrue(instructions[1].default)
        self.assertIsNone(instructions[2].default)
        self.assertIsNone(instructions[3].default)

    def testAllBooleanClusterGetsDefault(self):
        instructions = self.tokenize("-ve")
        self.assertTrue(instructions[1].default)

    def testMixedClusterGetsNoDefault(self):
        instructions = self.tokenize("-vc")
        self.assertIsNone(instructions[1].default)

    def testClusterWithUnresolvedLetterGetsNoDefault(self):
        instructions = self.tokenize("-vx")
        self.assertIsNone(instructions[1].default)

    def testEagerPolicyDefaultsEveryCluster(self):
        config = Config(policy="eager")
        instructions = self.tokenize("-c", "--exclude", config=config)
        self.assertTrue(instructions[1].default)
        self.assertIsNone(instructions[2].default)

    def testAmbiguousLetterRecordsFault(self):
        schema = Schema({"size": 0, "source": []})
        faults = []
        instructions = tokenize(argv("-s", "3"), schema, self.config, faults)
        self.assertEqual(instructions[1].name, ["size"])
        self.assertEqual(len(faults), 1)
        self.assertIsInstance(faults[0], AmbiguousShorthandWarning)
        self.assertEqual(faults[0].options["shadowed"], ("source",))
        self.assertIn("first position", faults[0].message)

    def testNegativeNumberIsAShortCluster(self):
        instructions = self.tokenize("--count", "-5")
        self.assertEqual(instructions[1].data, [])
        self.assertEqual(instructions[2].name, ["5"])


class TestSettle(TestCase):
    """Behavioral tests for settle()."""

    def setUp(self):
        self.schema = Schema(TEMPLATE)

    def run_pipeline(self, *tokens, config=None):
        config = config or Config()
        faults = []
        instructions = settle(tokenize(argv(*tokens), self.schema, config), config, faults)
        return instructions, faults

    def testDefaultsAreHoisted(self):
        instructions, faults = self.run_pipeline("--exclude", "-vq")
        self.assertEqual([instruction.data for instruction in instructions], [[True], [True]])
        self.assertEqual(faults, [])

    def testExplicitValueWinsOverDefault(self):
        instructions, _ = self.run_pipeline("--exclude", "false")
        self.assertEqual(instructions[0].data, [False])

    def testValuelessInstructionsArePruned(self):
        instructions, faults = self.run_pipeline("-c", "--destination", "-vc")
        self.assertEqual(instructions, [])
        self.assertEqual(len(faults), 3)
        self.assertTrue(all(isinstance(fault, ValuelessSwitchWarning) for fault in faults))
        self.assertEqual([fault.options["token"] for fault in faults], ["-c", "--destination", "-vc"])
        self.assertEqual(faults[0].options["names"], ("count",))
        self.assertEqual(faults[1].options["names"], ("destination",))

    def testEmptyLeadingGroupIsPrunedSilently(self):
        instructions, faults = self.run_pipeline()
        self.assertEqual(instructions, [])
        self.assertEqual(faults, [])

    def testEagerPolicyKeepsValuelessInstructions(self):
        instructions, faults = self.run_pipeline("-c", "--destination", config=Config(policy=Policy.EAGER))
        self.assertEqual(len(instructions), 3)
        self.assertEqual(instructions[1].data, [True])
        self.assertEqual(instructions[2].data, [])
        self.assertEqual(faults, [])


if __name__ == '__main__':
    unittest.main()
