"""Tests for praxis.fol.terms and praxis.fol.parser."""

import pytest

from praxis.fol.parser import parse_predicate, parse_symbol, parse_term
from praxis.fol.terms import Predicate, Symbol, Variable


class TestTerms:
    def test_variable_prefix_added(self):
        assert Variable("obj").name == "?obj"
        assert Variable("?obj").name == "?obj"

    def test_type_is_part_of_equality(self):
        assert Symbol("cup1") != Symbol("cup1", "physobj")
        assert Variable("?x", "agent") == Variable("x", "agent")

    def test_predicate_args_become_tuple(self):
        p = Predicate("holding", [Symbol("robot1"), Symbol("cup1")])
        assert isinstance(p.args, tuple)
        assert hash(p) == hash(Predicate("holding", (Symbol("robot1"), Symbol("cup1"))))

    def test_access(self):
        p = parse_predicate("holding(robot1, cup1)")
        assert p.size() == 2
        assert len(p) == 2
        assert p.get(0) == Symbol("robot1")
        assert list(p) == [Symbol("robot1"), Symbol("cup1")]

    def test_variables_depth_first_without_repeats(self):
        p = parse_predicate("goal(?a, on(?b, ?a), ?c)")
        assert [v.name for v in p.variables()] == ["?a", "?b", "?c"]
        assert not p.is_ground()
        assert parse_predicate("on(a, b)").is_ground()

    def test_substitute(self):
        p = parse_predicate("goal(?a, holding(?a, ?o))")
        bound = p.substitute({"?a": Symbol("robot1"), "?o": Symbol("cup1")})
        assert bound == parse_predicate("goal(robot1, holding(robot1, cup1))")


class TestParser:
    def test_symbol(self):
        assert parse_term("robot1") == Symbol("robot1")
        assert parse_term("robot1:agent") == Symbol("robot1", "agent")

    def test_variable(self):
        assert parse_term("?obj") == Variable("?obj")
        assert parse_term("?obj:physobj") == Variable("?obj", "physobj")

    def test_nested_predicate(self):
        p = parse_predicate("goal(robot1, holding(robot1, ?o:physobj))")
        assert p.name == "goal"
        inner = p.get(1)
        assert isinstance(inner, Predicate)
        assert inner.get(1) == Variable("?o", "physobj")

    def test_zero_arity(self):
        assert parse_predicate("stop()") == Predicate("stop", ())

    def test_quoted_symbol(self):
        p = parse_predicate('say(robot1, "hello, world":utterance)')
        assert p.get(1) == Symbol("hello, world", "utterance")

    def test_whitespace_is_ignored(self):
        assert parse_predicate(" on ( a ,b ) ") == parse_predicate("on(a,b)")

    @pytest.mark.parametrize(
        "text",
        [
            "holding(?actor:agent, ?obj:physobj)",
            "goal(robot1, holding(robot1, cup1))",
            'say(self, "it\'s a \\"test\\"")',
            "stop()",
        ],
    )
    def test_str_parses_back(self, text):
        term = parse_term(text)
        assert parse_term(str(term)) == term

    @pytest.mark.parametrize("text", ["", "holding(a,", "a b", ")", "f(a))", "?", "a:"])
    def test_malformed_input(self, text):
        with pytest.raises(ValueError):
            parse_term(text)

    def test_parse_predicate_rejects_symbol(self):
        with pytest.raises(ValueError, match="Expected a predicate"):
            parse_predicate("robot1")

    def test_parse_symbol_rejects_predicate(self):
        with pytest.raises(ValueError, match="Expected a symbol"):
            parse_symbol("on(a, b)")
